"""Infrastructure Layer — store adapters, durable identity, cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All SQLAlchemy errors are mapped to StoreError before leaving this layer

Design Decisions:
    - Adapters implement the core Protocols structurally (no base classes)
"""
