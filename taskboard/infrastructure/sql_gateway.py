"""SQL Store Gateway — StoreGateway over the SQLAlchemy models.

Invariants:
    - Returned rows are plain dicts keyed by column name (no ORM objects escape)
    - insert() returns the row as stored: id and created_at populated
    - delete() relies on the database's ON DELETE CASCADE for comments
    - Every failure surfaces as StoreError (unknown table/column included)
    - Ties in the requested order are broken by id, so load order is stable

Design Decisions:
    - One AsyncSession per call via DatabaseSessionManager: each store call is its
      own transaction, matching a REST-style store where every request commits
    - Bulk UPDATE/DELETE statements over load-then-mutate: no read before write,
      and the cascade is left to the database
"""

import logging
from typing import Any

from sqlalchemy import delete as sa_delete, inspect, select, update as sa_update

from taskboard.core.domain_types import OrderKey, Table
from taskboard.core.errors import ErrorContext, StoreError
from taskboard.core.repository_protocols import Row
from taskboard.db.base import Base
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.models import CommentRecord, TaskRecord, UserRecord

logger = logging.getLogger(__name__)

# Explicit table -> model map (no reflection over Base.registry)
_MODELS: dict[Table, type[Base]] = {
    Table.USERS: UserRecord,
    Table.TASKS: TaskRecord,
    Table.COMMENTS: CommentRecord,
}


def _model_for(table: Table, operation: str) -> type[Base]:
    try:
        return _MODELS[Table(table)]
    except ValueError:
        raise StoreError(f"unknown table '{table}'", operation)


def _column_names(model: type[Base]) -> set[str]:
    return {c.key for c in inspect(model).columns}


def _check_columns(model: type[Base], values: Row, operation: str) -> None:
    unknown = set(values) - _column_names(model)
    if unknown:
        raise StoreError(
            f"unknown column(s) {sorted(unknown)} on {model.__tablename__}", operation,
            ErrorContext(table=model.__tablename__),
        )


def _to_row(record: Any) -> Row:
    return {c.key: getattr(record, c.key) for c in inspect(type(record)).columns}


class SqlStoreGateway:
    """Remote store backed by a relational database through SQLAlchemy."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def select(self, table: Table, order_key: OrderKey) -> list[Row]:
        model = _model_for(table, "select")
        key = OrderKey(order_key).value
        if key not in _column_names(model):
            raise StoreError(f"cannot order {model.__tablename__} by '{key}'", "select")
        order_column = getattr(model, key)
        async with self._db.session("select") as db:
            result = await db.execute(
                select(model).order_by(order_column, model.id),
            )
            records = result.scalars().all()
        logger.debug(f"Selected {len(records)} rows from {model.__tablename__}")
        return [_to_row(r) for r in records]

    async def insert(self, table: Table, row: Row) -> Row:
        model = _model_for(table, "insert")
        _check_columns(model, row, "insert")
        async with self._db.session("insert") as db:
            record = model(**row)
            db.add(record)
            await db.commit()
            await db.refresh(record)
        logger.debug(f"Inserted {model.__tablename__} row {record.id}")
        return _to_row(record)

    async def update(self, table: Table, row_id: int, patch: Row) -> None:
        model = _model_for(table, "update")
        _check_columns(model, patch, "update")
        if "id" in patch:
            raise StoreError("id is immutable", "update")
        async with self._db.session("update") as db:
            result = await db.execute(
                sa_update(model).where(model.id == row_id).values(**patch),
            )
            matched = result.rowcount
            await db.commit()
        if matched == 0:
            logger.warning(
                f"Update matched no {model.__tablename__} row {row_id}",
                extra={"table": model.__tablename__},
            )

    async def delete(self, table: Table, row_id: int) -> None:
        model = _model_for(table, "delete")
        async with self._db.session("delete") as db:
            await db.execute(sa_delete(model).where(model.id == row_id))
            await db.commit()
        logger.debug(f"Deleted {model.__tablename__} row {row_id}")
