"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; failures use the {"error", "details"?} envelope

Design Decisions:
    - Thin routes delegate payload mapping to core/user_documents
"""
