"""Service test fixtures — fake advisory transport + FastAPI test client.

Invariants:
    - Every test gets an empty session registry
    - get_advisory_client dependency overridden: no real Anthropic calls
    - mock_llm.responses is consumed in order by create_message calls

Design Decisions:
    - Override at the transport boundary (MockAnthropicClient) so the real
      AdvisoryClient request shaping and parsing run in route tests too
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from decision_sim.api.routes import session_lifecycle
from decision_sim.main import app
from decision_sim.services.advisory_client import AdvisoryClient

from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
def mock_llm():
    """Empty MockAnthropicClient; tests append to ._responses as needed."""
    return MockAnthropicClient([])


@pytest.fixture
def advisory(mock_llm):
    return AdvisoryClient(mock_llm, model="test-model")


@pytest.fixture
def clock():
    """Controllable clock: advance with clock.advance(seconds)."""

    class _Clock:
        def __init__(self):
            self.now = datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

        def __call__(self):
            return self.now

        def advance(self, seconds):
            self.now += timedelta(seconds=seconds)

    return _Clock()


@pytest.fixture
async def client(advisory):
    """FastAPI test client with the advisory dependency overridden."""
    app.dependency_overrides[session_lifecycle.get_advisory_client] = (
        lambda: advisory
    )
    session_lifecycle._machines.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    session_lifecycle._machines.clear()
