"""Session State — pure aggregate transitions, no IO.

Invariants:
    - begin_conversation clears everything a previous cycle could leave behind
    - complete_review always clears pending and lands on REVIEWING
    - is_busy covers both kinds of in-flight request
"""

from datetime import datetime, timezone

from decision_sim.core.domain_types import RiskAppetite, Screen, Speaker
from decision_sim.core.scenario_catalog import default_scenario
from decision_sim.core.session_state import (
    FALLBACK_OUTCOME_TEXT,
    FALLBACK_SUGGESTION_TEXT,
    AnalysisResult,
    Session,
    fallback_analysis,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_new_session_starts_on_selection():
    session = Session()
    assert session.screen == Screen.SELECTING
    assert session.scenario is None
    assert session.transcript == []
    assert session.is_busy is False


def test_begin_conversation_sets_scenario_and_clock():
    session = Session()
    session.begin_conversation(default_scenario(), NOW)
    assert session.screen == Screen.CONVERSING
    assert session.scenario == default_scenario()
    assert session.started_at == NOW


def test_begin_conversation_clears_previous_cycle():
    session = Session()
    session.transcript = ["stale"]
    session.analysis = fallback_analysis()
    session.decision_latency_seconds = 42
    session.begin_conversation(default_scenario(), NOW)
    assert session.transcript == []
    assert session.analysis is None
    assert session.decision_latency_seconds is None


def test_append_turn_grows_transcript():
    session = Session()
    session.begin_conversation(default_scenario(), NOW)
    turn = session.append_turn(Speaker.LEADER, "질문")
    assert session.turn_count == 1
    assert turn.speaker == Speaker.LEADER
    assert session.transcript[-1] is turn


def test_is_busy_tracks_both_flags():
    session = Session()
    session.awaiting_reply = True
    assert session.is_busy
    session.awaiting_reply = False
    session.pending = True
    assert session.is_busy


def test_complete_review_clears_pending():
    session = Session()
    session.begin_conversation(default_scenario(), NOW)
    session.pending = True
    analysis = AnalysisResult(RiskAppetite.HIGH, "성장", ("a", "b"))
    session.complete_review(analysis)
    assert session.screen == Screen.REVIEWING
    assert session.analysis is analysis
    assert session.pending is False


def test_fallback_analysis_is_fixed_record():
    analysis = fallback_analysis()
    assert analysis.risk_appetite == RiskAppetite.INSUFFICIENT_INFO
    assert analysis.expected_outcome == FALLBACK_OUTCOME_TEXT
    assert analysis.suggestions == (FALLBACK_SUGGESTION_TEXT,)
    assert analysis.is_fallback is True
    assert fallback_analysis() == analysis
