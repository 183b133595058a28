"""Data Loader — fetches users, tasks and comments and builds one consistent snapshot.

Invariants:
    - Reads are issued in order: users (by id), tasks (by created_at), comments (by created_at)
    - All three reads must succeed and every row must map, or LoadFailure is raised
    - A snapshot with dangling references is never returned
    - The loader returns a snapshot; it never publishes one (the board does)

Design Decisions:
    - Sequential awaits over asyncio.gather: the read order is part of the contract
    - One aggregated LoadFailure naming the failing table: the caller shows a single
      message and keeps the snapshot empty, no partial sets
"""

import logging
from typing import Callable, TypeVar

from taskboard.core.domain_types import OrderKey, Table
from taskboard.core.errors import LoadFailure, StoreError
from taskboard.core.repository_protocols import Row, StoreGateway
from taskboard.core.row_mapping import comment_from_row, task_from_row, user_from_row
from taskboard.core.snapshot import Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataLoader:
    """Loads the three record sets from the store gateway."""

    def __init__(self, gateway: StoreGateway):
        self._gateway = gateway

    async def load_all(self) -> Snapshot:
        """Read and map every table. Raises LoadFailure on any failure."""
        users = await self._load(Table.USERS, OrderKey.ID, user_from_row)
        tasks = await self._load(Table.TASKS, OrderKey.CREATED_AT, task_from_row)
        comments = await self._load(Table.COMMENTS, OrderKey.CREATED_AT, comment_from_row)

        snapshot = Snapshot(users=tuple(users), tasks=tuple(tasks), comments=tuple(comments))
        problems = snapshot.dangling_references()
        if problems:
            raise LoadFailure(
                "snapshot", f"inconsistent store state ({problems[0]})",
            )
        logger.info(
            f"Loaded {len(users)} users, {len(tasks)} tasks, {len(comments)} comments",
        )
        return snapshot

    async def _load(
        self, table: Table, order_key: OrderKey, mapper: Callable[[Row], T],
    ) -> list[T]:
        try:
            rows = await self._gateway.select(table, order_key)
        except StoreError as e:
            logger.error(
                f"Failed to read {table.value}: {e.message}",
                extra={"table": table.value, "error_code": e.code},
            )
            raise LoadFailure(table.value, e.message) from e
        try:
            return [mapper(row) for row in rows]
        except (ValueError, TypeError) as e:
            logger.error(
                f"Malformed {table.value} row: {e}", extra={"table": table.value},
            )
            raise LoadFailure(table.value, f"malformed row ({e})") from e
