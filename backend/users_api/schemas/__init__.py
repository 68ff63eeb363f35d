"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe responses; request bodies are decoded in core/

Design Decisions:
    - Separate from core: schemas are API contracts, core owns document shape
"""
