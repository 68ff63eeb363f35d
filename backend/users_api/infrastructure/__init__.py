"""Infrastructure Layer — database connection and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Driver failures during connection mapped to DatabaseConnectionError

Design Decisions:
    - One cached client per process; no retry wrapper (driver timeouts bound calls)
"""
