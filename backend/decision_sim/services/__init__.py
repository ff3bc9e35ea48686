"""Services Layer — advisory client, session machine, and export bundling.

Invariants:
    - The session machine is the only writer of Session state
    - Remote calls happen here, never in core/

Design Decisions:
    - Export bundling has no dependency on the machine or the advisory client
"""
