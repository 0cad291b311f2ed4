# app/db/init_db.py
"""Database initialization utilities."""
import logging
import secrets
from decimal import Decimal
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.db.base import Base, import_models
from app.db.session import SessionLocal, engine as default_engine

logger = logging.getLogger(__name__)

DEMO_ROOMS = [
    {
        "number": "101",
        "type": "standard",
        "price": Decimal("150.00"),
        "capacity": 2,
        "amenities": ["wifi", "tv", "minibar"],
        "description": "Comfortable standard room with modern amenities",
    },
    {
        "number": "201",
        "type": "deluxe",
        "price": Decimal("250.00"),
        "capacity": 3,
        "amenities": ["wifi", "tv", "minibar", "balcony", "room-service"],
        "description": "Spacious deluxe room with city view and premium amenities",
    },
    {
        "number": "301",
        "type": "suite",
        "price": Decimal("400.00"),
        "capacity": 4,
        "amenities": ["wifi", "tv", "minibar", "balcony", "room-service", "jacuzzi"],
        "description": "Luxurious suite with separate living area and premium amenities",
    },
    {
        "number": "401",
        "type": "presidential",
        "price": Decimal("800.00"),
        "capacity": 6,
        "amenities": ["wifi", "tv", "minibar", "balcony", "room-service", "jacuzzi", "kitchen"],
        "description": "Presidential suite with panoramic views and exclusive amenities",
    },
]

DEMO_USERS = [
    {"email": "admin@hotel.local", "first_name": "Admin", "last_name": "User", "role": "admin"},
    {"email": "guest@hotel.local", "first_name": "Demo", "last_name": "Guest", "role": "customer"},
]


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all missing tables.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    bind = bind or default_engine
    import_models()

    existing_tables = inspect(bind).get_table_names()
    Base.metadata.create_all(bind=bind)
    if existing_tables:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
    else:
        logger.info("Database tables created successfully")


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Use with caution.
    Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=bind or default_engine)
    logger.warning("All database tables dropped")


def seed_demo_data(db: Optional[Session] = None) -> int:
    """
    Insert demo users and rooms when the rooms table is empty.

    Returns:
        Number of rooms inserted
    """
    from app.core.security import hash_password
    from app.models.base.enums import RoomType, UserRole
    from app.models.room.room import Room
    from app.models.user.user import User

    owns_session = db is None
    db = db or SessionLocal()
    try:
        if db.query(Room).count():
            logger.info("Demo data skipped, rooms already present")
            return 0

        for data in DEMO_USERS:
            if db.query(User).filter(User.email == data["email"]).first() is None:
                db.add(User(
                    email=data["email"],
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    role=UserRole(data["role"]),
                    password_hash=hash_password(secrets.token_urlsafe(16)),
                ))

        for data in DEMO_ROOMS:
            db.add(Room(**{**data, "type": RoomType(data["type"])}))

        db.commit()
        logger.info(f"Seeded {len(DEMO_ROOMS)} demo rooms")
        return len(DEMO_ROOMS)
    except Exception:
        db.rollback()
        logger.error("Error seeding demo data", exc_info=True)
        raise
    finally:
        if owns_session:
            db.close()
