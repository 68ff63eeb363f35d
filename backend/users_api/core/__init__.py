"""Core Layer — pure domain logic, no IO, no async, no database calls.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - All functions are pure and deterministic (timestamps passed in)

Design Decisions:
    - Functional core separated from the imperative shell (routes, connection manager)
"""
