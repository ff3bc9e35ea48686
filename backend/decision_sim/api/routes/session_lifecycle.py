"""Session Lifecycle — create/read/restart/delete of in-memory per-tab sessions.

Invariants:
    - One SessionMachine per browser tab, keyed by UUID in _machines
    - _machines dict is the single source for in-memory session state
    - Every route responds with the freshly rendered view

Design Decisions:
    - _machines as module-level dict: single-process uvicorn, state lost on restart
      (persistence across sessions is out of scope)
    - get_machine_or_404 exported for reuse by session_actions
    - Advisory client is a FastAPI dependency so tests can override it
"""

import logging
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, status

from decision_sim.config import get_settings
from decision_sim.core.domain_types import SessionId
from decision_sim.core.errors import ResourceNotFoundError
from decision_sim.core.views import render_view
from decision_sim.infrastructure.anthropic_client import AnthropicClient
from decision_sim.schemas.views import SessionView
from decision_sim.services.advisory_client import AdvisoryClient
from decision_sim.services.session_machine import SessionMachine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])

_machines: dict[UUID, SessionMachine] = {}

_advisory_client: AdvisoryClient | None = None


def get_advisory_client() -> AdvisoryClient:
    """Singleton advisory client — AsyncAnthropic is connection-pool-safe."""
    global _advisory_client
    if _advisory_client is None:
        settings = get_settings()
        transport = AnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
        _advisory_client = AdvisoryClient(
            transport,
            model=settings.advisor_model,
            advisor_max_tokens=settings.advisor_max_tokens,
            analysis_max_tokens=settings.analysis_max_tokens,
        )
    return _advisory_client


def get_machine_or_404(session_id: UUID) -> SessionMachine:
    """Get the session machine or raise 404. Exported for session_actions."""
    machine = _machines.get(session_id)
    if machine is None:
        raise ResourceNotFoundError("Session", str(session_id))
    return machine


def session_view(machine: SessionMachine) -> SessionView:
    return SessionView(
        session_id=machine.session_id, view=render_view(machine.session),
    )


@router.post(
    "", response_model=SessionView, status_code=status.HTTP_201_CREATED,
)
async def create_session(
    advisory: AdvisoryClient = Depends(get_advisory_client),
):
    """Open a fresh session on the selection screen."""
    session_id = SessionId(uuid4())
    machine = SessionMachine(advisory, session_id=session_id)
    _machines[session_id] = machine
    logger.info("Session created", extra={"session_id": str(session_id)})
    return session_view(machine)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session_id: UUID):
    """Render the current screen."""
    return session_view(get_machine_or_404(session_id))


@router.post("/{session_id}/restart", response_model=SessionView)
async def restart_session(session_id: UUID):
    """onRestart — back to scenario selection with a brand-new session."""
    machine = get_machine_or_404(session_id)
    machine.restart()
    return session_view(machine)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID):
    """Tab closed. Any in-flight request finishes against the detached machine."""
    get_machine_or_404(session_id)
    _machines.pop(session_id, None)
    logger.info("Session deleted", extra={"session_id": str(session_id)})
