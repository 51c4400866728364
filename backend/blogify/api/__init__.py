"""API Layer — FastAPI routes, identity middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services; identity is resolved once per request
"""
