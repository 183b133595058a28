"""Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - Schemas never reach into the snapshot; routes convert entities explicitly
"""
