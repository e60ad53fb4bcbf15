"""Pydantic Schemas — manipulation (input) and response (output) shapes.

Invariants:
    - Wire names are camelCase, Python names snake_case
    - Input shapes never carry ids or timestamps

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
