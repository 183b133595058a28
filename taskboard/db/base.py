"""SQLAlchemy Declarative Base — shared metadata for the users/tasks/comments models.

Invariants:
    - All models inherit from Base
    - Constraint names are deterministic (naming convention), so migrations can
      drop or alter a foreign key by name on every backend

Design Decisions:
    - Separate file for Base: models and the migration env import it without
      importing each other
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all task board ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
