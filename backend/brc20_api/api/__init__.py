"""API Layer - FastAPI routes, cache hooks and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (304 carries no body)
"""
