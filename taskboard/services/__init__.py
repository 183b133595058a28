"""Services Layer — async orchestration of store calls around the pure core.

Invariants:
    - Every store call goes through a StoreGateway (core/repository_protocols.py)
    - Local state changes only after the store confirms a read or write
"""
