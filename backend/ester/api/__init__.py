"""API Layer - FastAPI routes, outcome translation and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes delegate to services/ and never touch the ORM directly
"""
