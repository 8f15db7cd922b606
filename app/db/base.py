"""
SQLAlchemy declarative base.

All models inherit from this Base class so Alembic and create_all
see every table through a single metadata object.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
