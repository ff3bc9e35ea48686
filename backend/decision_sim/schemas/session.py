"""Session Schemas — Pydantic models for intents arriving at the API boundary.

Invariants:
    - ScenarioSelect.scenario_id is non-empty; catalog membership is checked by the route
    - MessageCreate.text may be empty or whitespace: that is a guard no-op in the
      session machine, not a validation error

Design Decisions:
    - Upper bound on message length only: the machine owns the emptiness rule
"""

from pydantic import BaseModel, Field


class ScenarioSelect(BaseModel):
    """onSelect intent."""
    scenario_id: str = Field(min_length=1, max_length=100)


class MessageCreate(BaseModel):
    """onSend intent."""
    text: str = Field(max_length=4000)
