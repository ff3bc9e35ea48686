"""Session Machine — the only writer of Session state; maps intents to transitions.

Invariants:
    - Legal edges: SELECTING → CONVERSING → REVIEWING → SELECTING (restart); anything
      else raises InvalidTransitionError without mutating the session
    - submit_message grows the transcript by exactly 2 (leader + advisor), success or not
    - finalize_decision always ends in REVIEWING with a non-null analysis
    - Guard no-ops (empty text, request pending, empty transcript) mutate nothing and
      make no advisory call
    - Guards run before the first await: one event loop, no locks needed

Design Decisions:
    - Failure policy lives here only: AdvisoryOutcome failures become the apology turn
      or the fallback analysis; unexpected exceptions from the advisory layer are
      logged and treated the same way so finalize can never get stuck
    - restart replaces the Session object wholesale instead of clearing fields
    - Clock injected: decision latency is testable without sleeping
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from decision_sim.core.decision_timing import elapsed_whole_seconds
from decision_sim.core.domain_types import Screen, SessionId, Speaker
from decision_sim.core.errors import (
    AdvisoryAPIError,
    ErrorContext,
    InvalidTransitionError,
)
from decision_sim.core.scenario_catalog import Scenario
from decision_sim.core.session_state import (
    APOLOGY_TEXT,
    AnalysisResult,
    ConversationTurn,
    Session,
    fallback_analysis,
)
from decision_sim.services.advisory_client import AdvisoryClient, AdvisoryOutcome

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionMachine:
    """Owns one Session for one browser tab."""

    def __init__(
        self,
        advisory: AdvisoryClient,
        session_id: SessionId | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.advisory = advisory
        self.session_id = session_id
        self.clock = clock
        self.session = Session()

    # ─── Intents ─────────────────────────────────────────────────

    def select_scenario(self, scenario: Scenario) -> None:
        self._require_screen("select_scenario", Screen.SELECTING)
        self.session.begin_conversation(scenario, self.clock())
        logger.info(
            "Scenario selected",
            extra=self._log_extra(scenario_id=scenario.id),
        )

    async def submit_message(self, text: str) -> ConversationTurn | None:
        """Send one leader message. Returns the advisor turn, or None for a no-op."""
        self._require_screen("submit_message", Screen.CONVERSING)
        session = self.session
        if not text or not text.strip() or session.is_busy:
            return None

        session.append_turn(Speaker.LEADER, text)
        session.awaiting_reply = True
        try:
            outcome = await self._converse(session, text)
        finally:
            session.awaiting_reply = False

        if outcome.ok:
            reply = outcome.value
        else:
            logger.warning(
                f"Advisor reply failed: {outcome.error.message}",
                extra=self._log_extra(error_code=outcome.error.code),
            )
            reply = APOLOGY_TEXT
        return session.append_turn(Speaker.ADVISOR, reply)

    async def finalize_decision(self) -> AnalysisResult | None:
        """Close the conversation and produce the report. None for a no-op."""
        self._require_screen("finalize_decision", Screen.CONVERSING)
        session = self.session
        if not session.transcript or session.is_busy:
            return None

        session.decision_latency_seconds = elapsed_whole_seconds(
            session.started_at, self.clock(),
        )
        session.pending = True
        analysis = fallback_analysis()
        try:
            outcome = await self._analyze(session)
            if outcome.ok:
                analysis = outcome.value
            else:
                logger.warning(
                    f"Analysis failed, using fallback: {outcome.error.message}",
                    extra=self._log_extra(error_code=outcome.error.code),
                )
        finally:
            session.complete_review(analysis)

        logger.info(
            "Decision finalized",
            extra=self._log_extra(turn_count=session.turn_count),
        )
        return analysis

    def restart(self) -> None:
        self._require_screen("restart", Screen.REVIEWING)
        self.session = Session()
        logger.info("Session restarted", extra=self._log_extra())

    # ─── Advisory calls ──────────────────────────────────────────

    async def _converse(self, session: Session, text: str) -> AdvisoryOutcome[str]:
        try:
            return await self.advisory.converse(
                session.scenario, list(session.transcript), text,
                context=self._error_context(),
            )
        except Exception as e:
            logger.error(f"Unexpected advisor failure: {e}", exc_info=True)
            return AdvisoryOutcome.failure(_as_simulator_error(e))

    async def _analyze(self, session: Session) -> AdvisoryOutcome[AnalysisResult]:
        try:
            return await self.advisory.analyze(
                session.scenario, list(session.transcript),
                context=self._error_context(),
            )
        except Exception as e:
            logger.error(f"Unexpected analysis failure: {e}", exc_info=True)
            return AdvisoryOutcome.failure(_as_simulator_error(e))

    # ─── Helpers ─────────────────────────────────────────────────

    def _require_screen(self, operation: str, screen: Screen) -> None:
        if self.session.screen != screen:
            raise InvalidTransitionError(
                operation, self.session.screen.value, self._error_context(),
            )

    def _error_context(self) -> ErrorContext:
        return ErrorContext(
            session_id=str(self.session_id) if self.session_id else None,
            screen=self.session.screen.value,
        )

    def _log_extra(self, **fields) -> dict:
        return {
            "session_id": str(self.session_id) if self.session_id else None,
            "screen": self.session.screen.value,
            **fields,
        }


def _as_simulator_error(e: Exception) -> AdvisoryAPIError:
    return AdvisoryAPIError(str(e), "unknown")
