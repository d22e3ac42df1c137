"""API Layer — FastAPI routes, request-scoped dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Failures rendered only through api/error_handlers.py
"""
