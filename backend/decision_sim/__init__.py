"""Agile Decision Simulator — leadership decision training backed by an AI advisor.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
