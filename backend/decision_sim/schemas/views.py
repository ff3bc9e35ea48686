"""View Schemas — response models for the three screen payloads rendered by core/views.py.

Invariants:
    - "screen" discriminates the union; exactly one payload per response
    - Shapes mirror core/views.py dicts field for field
"""

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field


class ScenarioCard(BaseModel):
    id: str
    category: str
    title: str
    description: str
    color: str


class TurnView(BaseModel):
    speaker: Literal["leader", "advisor"]
    text: str


class AnalysisView(BaseModel):
    risk_appetite: str
    risk_color: str
    expected_outcome: str
    suggestions: list[str]
    is_fallback: bool


class SelectionView(BaseModel):
    screen: Literal["selecting"]
    heading: str
    subheading: str
    scenarios: list[ScenarioCard]
    default_scenario_id: str


class ConversationView(BaseModel):
    screen: Literal["conversing"]
    scenario: ScenarioCard
    transcript: list[TurnView]
    placeholder: str
    can_send: bool
    can_finalize: bool
    is_loading: bool
    loading_title: str | None = None
    loading_text: str | None = None


class ReportView(BaseModel):
    screen: Literal["reviewing"]
    heading: str
    scenario: ScenarioCard
    decision_speed: str
    analysis: AnalysisView | None = None
    unavailable_title: str | None = None
    unavailable_text: str | None = None


ScreenView = Annotated[
    Union[SelectionView, ConversationView, ReportView],
    Field(discriminator="screen"),
]


class SessionView(BaseModel):
    """Rendered session — what every session route returns."""
    session_id: UUID
    view: ScreenView
