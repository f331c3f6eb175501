"""Pydantic Schemas — request/response validation for the /devices endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - State enum from core/ used for state fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
