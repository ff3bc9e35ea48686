"""Session Actions — the conversation-screen intents (select, send, finalize).

Invariants:
    - Routes never contain business logic: they resolve inputs and delegate to SessionMachine
    - Unknown scenario ids are rejected here (404) before the machine is touched
    - Guard no-ops still return 200 with the unchanged view

Design Decisions:
    - Requests await the advisory call and answer with the post-call view; a
      concurrent GET on the same session renders the loading state meanwhile
"""

import logging
from uuid import UUID

from fastapi import APIRouter

from decision_sim.api.routes.session_lifecycle import get_machine_or_404, session_view
from decision_sim.core.errors import ResourceNotFoundError
from decision_sim.core.scenario_catalog import find_scenario
from decision_sim.schemas.session import MessageCreate, ScenarioSelect
from decision_sim.schemas.views import SessionView

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post("/{session_id}/scenario", response_model=SessionView)
async def select_scenario(session_id: UUID, body: ScenarioSelect):
    """onSelect — start the conversation for the chosen scenario."""
    machine = get_machine_or_404(session_id)
    scenario = find_scenario(body.scenario_id)
    if scenario is None:
        raise ResourceNotFoundError("Scenario", body.scenario_id)
    machine.select_scenario(scenario)
    return session_view(machine)


@router.post("/{session_id}/messages", response_model=SessionView)
async def send_message(session_id: UUID, body: MessageCreate):
    """onSend — one leader turn plus one advisor turn."""
    machine = get_machine_or_404(session_id)
    await machine.submit_message(body.text)
    return session_view(machine)


@router.post("/{session_id}/decision", response_model=SessionView)
async def finalize_decision(session_id: UUID):
    """onFinalize — close the conversation and render the report."""
    machine = get_machine_or_404(session_id)
    await machine.finalize_decision()
    return session_view(machine)
