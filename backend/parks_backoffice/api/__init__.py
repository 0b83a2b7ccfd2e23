"""API Layer — FastAPI routes, shared dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every error leaves the API as the {"error": {...}} envelope

Design Decisions:
    - Thin routes: code generation, history and stock arithmetic live in
      core/ and services/
"""
