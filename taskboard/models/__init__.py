"""ORM Models — SQLAlchemy declarative models for the remote store tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Table and column names are the remote names the row mapping expects

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
    - *Record suffix: keeps ORM classes apart from the core entities (User, Task, Comment)
"""

from taskboard.models.user import UserRecord  # noqa: F401
from taskboard.models.task import TaskRecord  # noqa: F401
from taskboard.models.comment import CommentRecord  # noqa: F401
