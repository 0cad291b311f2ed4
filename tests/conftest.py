"""
Shared pytest fixtures: an in-memory SQLite database rebuilt for every
test, factories for users, rooms and bookings, and a TestClient wired to
the same session.
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.init_db import drop_db, init_db
from app.db.session import get_db
from app.main import app
from app.models import Booking, BookingStatus, Room, RoomStatus, RoomType, User, UserRole
from app.services.booking import (
    AdminNotificationHub,
    BookingNotificationService,
    BookingPolicy,
    BookingService,
)

NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """Fresh in-memory database with the full schema."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=test_engine)
    yield test_engine
    drop_db(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.CUSTOMER, **overrides) -> User:
        counter["n"] += 1
        user = User(
            email=overrides.pop("email", f"user{counter['n']}@example.com"),
            first_name=overrides.pop("first_name", "Guest"),
            last_name=overrides.pop("last_name", str(counter["n"])),
            role=role,
            **overrides,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def customer(make_user) -> User:
    return make_user()


@pytest.fixture
def other_customer(make_user) -> User:
    return make_user()


@pytest.fixture
def admin(make_user) -> User:
    return make_user(role=UserRole.ADMIN, email="admin@example.com")


@pytest.fixture
def make_room(db):
    def _make_room(number: str = "101", **overrides) -> Room:
        room = Room(
            number=number,
            type=overrides.pop("type", RoomType.STANDARD),
            price=overrides.pop("price", Decimal("150.00")),
            capacity=overrides.pop("capacity", 2),
            status=overrides.pop("status", RoomStatus.AVAILABLE),
            amenities=overrides.pop("amenities", ["wifi", "tv"]),
            images=overrides.pop("images", []),
            **overrides,
        )
        db.add(room)
        db.commit()
        db.refresh(room)
        return room

    return _make_room


@pytest.fixture
def room(make_room) -> Room:
    """Room 101, 150.00 per night, two guests, available."""
    return make_room("101")


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, bypassing availability checks."""

    def _make_booking(
        user: User,
        room: Room,
        check_in: date,
        check_out: date,
        status: BookingStatus = BookingStatus.CONFIRMED,
        total_price: Decimal = Decimal("450.00"),
        **overrides,
    ) -> Booking:
        booking = Booking(
            user_id=user.id,
            room_id=room.id,
            check_in=check_in,
            check_out=check_out,
            guests=overrides.pop("guests", 2),
            total_price=total_price,
            remaining_amount=total_price,
            status=status,
            **overrides,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make_booking


@pytest.fixture
def hub() -> AdminNotificationHub:
    return AdminNotificationHub(buffer_size=10)


@pytest.fixture
def sent_emails() -> List:
    return []


@pytest.fixture
def notifier(hub, sent_emails) -> BookingNotificationService:
    return BookingNotificationService(
        hub=hub,
        email_enabled=True,
        sender=lambda message, config: sent_emails.append(message),
    )


@pytest.fixture
def policy() -> BookingPolicy:
    return BookingPolicy()


@pytest.fixture
def booking_service(db, policy, notifier) -> BookingService:
    return BookingService.for_session(db, policy=policy, notifier=notifier, clock=lambda: NOW)


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> Dict[str, str]:
        token = create_access_token(user.id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
