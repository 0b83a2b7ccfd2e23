"""Services Layer — database-aware helpers shared by several routes.

Invariants:
    - Services take an AsyncSession and never commit; callers own the transaction
"""
