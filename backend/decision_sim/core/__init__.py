"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, schemas/, or infrastructure/
    - All functions are deterministic (the clock is passed in, never read)

Design Decisions:
    - Functional core separated from imperative shell
"""
