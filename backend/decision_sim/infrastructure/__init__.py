"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic other than core/errors
    - All external calls wrapped with error mapping

Design Decisions:
    - Thin wrappers over raw clients: SDK exception types never leak upward
"""
