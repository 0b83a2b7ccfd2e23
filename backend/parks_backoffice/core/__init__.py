"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Code candidates, polygon tests, permission merges and stock arithmetic
      are pure and deterministic

Design Decisions:
    - Functional core separated from the database-probing shell in services/
"""
