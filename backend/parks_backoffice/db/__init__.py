"""Database Base — SQLAlchemy declarative Base and shared column mixins.

Design Decisions:
    - Engine and session lifecycle live in infrastructure/database.py
"""
