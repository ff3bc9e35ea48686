"""Pydantic Schemas — request/response validation at the system boundaries.

Invariants:
    - Schemas validate at system boundary (user input, LLM output, API responses)
    - Domain types from core/ used for enum fields
"""
