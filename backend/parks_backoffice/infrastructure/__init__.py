"""Infrastructure Layer — database lifecycle and structured logging.

Invariants:
    - Infrastructure never imports from core/ domain logic except errors
    - SQLAlchemy errors leave this layer as DatabaseError
"""
