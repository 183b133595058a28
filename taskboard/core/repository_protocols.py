"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Gateway failures are raised as StoreError, never returned as values

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async gateway: every store call is a coroutine the caller awaits; there is no
      timeout or cancel at this layer, a call either resolves or never returns
    - Sync identity store: the durable copy is local and small, and the session
      manager must persist it in the same step as the state transition
    - Rows are plain dicts keyed by remote column names; renaming to the
      semantic model happens in core/row_mapping.py, not in adapters
"""

from typing import Any, Protocol

from taskboard.core.domain_types import OrderKey, Table

Row = dict[str, Any]


class StoreGateway(Protocol):
    """Row-level CRUD against the remote relational store — implemented by shell."""
    async def select(self, table: Table, order_key: OrderKey) -> list[Row]: ...
    async def insert(self, table: Table, row: Row) -> Row: ...
    async def update(self, table: Table, row_id: int, patch: Row) -> None: ...
    async def delete(self, table: Table, row_id: int) -> None: ...


class IdentityStore(Protocol):
    """Durable local copy of the active user record (serialized JSON)."""
    def get(self) -> str | None: ...
    def set(self, serialized_user: str) -> None: ...
    def clear(self) -> None: ...
