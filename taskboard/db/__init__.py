"""Database Infrastructure — SQLAlchemy declarative Base for the remote store schema.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for local runs and tests, asyncpg for PostgreSQL deployments
"""
