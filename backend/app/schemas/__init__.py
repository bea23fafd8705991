"""Pydantic Schemas — tool argument models and the HTTP envelope.

Invariants:
    - Schemas validate at system boundary (tool arguments, request bodies)
    - Limits come from core/domain_types.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
