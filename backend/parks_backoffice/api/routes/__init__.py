"""Route Modules — one file per resource family (parks, trees, assets, ...).

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Multi-row writes go through atomic(db) so a failure leaves nothing behind
"""
