"""SQLAlchemy Base class for all models."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from app.models.user.user import User  # noqa: F401
    from app.models.room.room import Room  # noqa: F401
    from app.models.booking.booking import Booking  # noqa: F401
