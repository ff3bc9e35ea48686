"""Session State — in-memory record of one selection → conversation → analysis cycle.

Invariants:
    - scenario is non-null whenever screen is CONVERSING or REVIEWING
    - transcript is append-only; it is only emptied by starting a fresh cycle
    - decision_latency_seconds is set once, at finalize, and never recomputed
    - analysis is non-null only once screen is REVIEWING
    - pending (analysis) and awaiting_reply (conversation) are true only while
      the matching advisory request is outstanding

Design Decisions:
    - Pure dataclasses, no IO: the session machine (services/) is the only writer
    - Transition helpers mutate in place but never await; guards stay atomic
      on a single event loop without locks
    - Fallback/apology texts live here: they are domain values, not UI strings
"""

from dataclasses import dataclass, field
from datetime import datetime

from decision_sim.core.domain_types import RiskAppetite, Screen, Speaker
from decision_sim.core.scenario_catalog import Scenario


APOLOGY_TEXT = "오류가 발생했습니다. 잠시 후 다시 시도해주세요."

FALLBACK_OUTCOME_TEXT = (
    "AI 분석 중 오류가 발생했습니다. 네트워크 연결을 확인하거나 나중에 다시 시도해 주세요."
)
FALLBACK_SUGGESTION_TEXT = "새로고침 후 다시 시작해 보세요."


@dataclass(frozen=True)
class ConversationTurn:
    speaker: Speaker
    text: str


@dataclass(frozen=True)
class AnalysisResult:
    """End-of-session report. suggestions is expected to hold 2-3 items (not enforced)."""
    risk_appetite: RiskAppetite
    expected_outcome: str
    suggestions: tuple[str, ...]
    is_fallback: bool = False


def fallback_analysis() -> AnalysisResult:
    """The fixed record shown when the analysis request fails in any way."""
    return AnalysisResult(
        risk_appetite=RiskAppetite.INSUFFICIENT_INFO,
        expected_outcome=FALLBACK_OUTCOME_TEXT,
        suggestions=(FALLBACK_SUGGESTION_TEXT,),
        is_fallback=True,
    )


@dataclass
class Session:
    """Mutable aggregate owned exclusively by the session machine."""

    screen: Screen = Screen.SELECTING
    scenario: Scenario | None = None
    transcript: list[ConversationTurn] = field(default_factory=list)
    started_at: datetime | None = None
    decision_latency_seconds: int | None = None
    analysis: AnalysisResult | None = None

    # Analysis request in flight (finalize)
    pending: bool = False

    # Conversational request in flight (submit)
    awaiting_reply: bool = False

    @property
    def turn_count(self) -> int:
        return len(self.transcript)

    @property
    def is_busy(self) -> bool:
        return self.pending or self.awaiting_reply

    def begin_conversation(self, scenario: Scenario, now: datetime) -> None:
        """Selecting → Conversing. Clears everything a previous cycle could leave."""
        self.scenario = scenario
        self.transcript = []
        self.analysis = None
        self.decision_latency_seconds = None
        self.started_at = now
        self.screen = Screen.CONVERSING

    def append_turn(self, speaker: Speaker, text: str) -> ConversationTurn:
        turn = ConversationTurn(speaker=speaker, text=text)
        self.transcript.append(turn)
        return turn

    def complete_review(self, analysis: AnalysisResult) -> None:
        """Conversing → Reviewing. Always reached once finalize has started."""
        self.analysis = analysis
        self.pending = False
        self.screen = Screen.REVIEWING
