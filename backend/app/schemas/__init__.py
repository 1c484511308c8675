"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain enums from core/ used for role and period fields
    - No response schema exposes a password hash

Design Decisions:
    - Separate from entities: schemas are API contracts, entities are the core's records
"""
