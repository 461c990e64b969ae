"""Core Layer — pure domain logic, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation and query construction are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
    - Store contract declared here as a Protocol; the shell implements it
"""
