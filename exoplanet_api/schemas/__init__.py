"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas carry the wire naming convention (camelCase) and type coercion only
    - Business rules live in core/, not in Field constraints

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
