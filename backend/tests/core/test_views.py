"""Presentation Views — pure rendering per screen.

Invariants:
    - One payload per screen, discriminated by "screen"
    - Buttons disabled while a request is in flight
    - Report renders the analysis, or the unavailable texts when there is none
"""

from datetime import datetime, timezone

from decision_sim.core.domain_types import RiskAppetite, Screen, Speaker
from decision_sim.core.scenario_catalog import default_scenario, find_scenario
from decision_sim.core.session_state import AnalysisResult, Session, fallback_analysis
from decision_sim.core.views import (
    ANALYSIS_LOADING_TEXT,
    ANALYSIS_LOADING_TITLE,
    ANALYSIS_UNAVAILABLE_TEXT,
    FIRST_QUESTION_PLACEHOLDER,
    FOLLOW_UP_PLACEHOLDER,
    REPLY_LOADING_TEXT,
    render_scenario,
    render_view,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _conversing():
    session = Session()
    session.begin_conversation(default_scenario(), NOW)
    return session


def test_selection_view_lists_catalog():
    view = render_view(Session())
    assert view["screen"] == "selecting"
    assert len(view["scenarios"]) == 4
    assert view["default_scenario_id"] == "crisis_1"


def test_scenario_card_colors_by_category():
    assert render_scenario(find_scenario("crisis_1"))["color"] == "red"
    assert render_scenario(find_scenario("opportunity_1"))["color"] == "green"
    assert render_scenario(find_scenario("env_1"))["color"] == "blue"


def test_empty_conversation_cannot_finalize():
    view = render_view(_conversing())
    assert view["placeholder"] == FIRST_QUESTION_PLACEHOLDER
    assert view["can_send"] is True
    assert view["can_finalize"] is False
    assert view["is_loading"] is False
    assert view["loading_text"] is None


def test_conversation_with_turns_can_finalize():
    session = _conversing()
    session.append_turn(Speaker.LEADER, "q")
    session.append_turn(Speaker.ADVISOR, "a")
    view = render_view(session)
    assert view["placeholder"] == FOLLOW_UP_PLACEHOLDER
    assert view["can_finalize"] is True
    assert view["transcript"][1] == {"speaker": "advisor", "text": "a"}


def test_awaiting_reply_disables_buttons():
    session = _conversing()
    session.append_turn(Speaker.LEADER, "q")
    session.awaiting_reply = True
    view = render_view(session)
    assert view["can_send"] is False
    assert view["can_finalize"] is False
    assert view["is_loading"] is True
    assert view["loading_title"] is None
    assert view["loading_text"] == REPLY_LOADING_TEXT


def test_pending_analysis_shows_spinner():
    session = _conversing()
    session.append_turn(Speaker.LEADER, "q")
    session.pending = True
    view = render_view(session)
    assert view["loading_title"] == ANALYSIS_LOADING_TITLE
    assert view["loading_text"] == ANALYSIS_LOADING_TEXT
    assert view["can_finalize"] is False


def test_report_renders_analysis_and_speed():
    session = _conversing()
    session.decision_latency_seconds = 125
    session.complete_review(AnalysisResult(RiskAppetite.LOW, "안정", ("x", "y", "z")))
    view = render_view(session)
    assert view["screen"] == Screen.REVIEWING.value
    assert view["decision_speed"] == "2분 5초"
    assert view["analysis"]["risk_color"] == "green"
    assert view["analysis"]["suggestions"] == ["x", "y", "z"]


def test_report_renders_fallback_as_analysis():
    session = _conversing()
    session.decision_latency_seconds = 3
    session.complete_review(fallback_analysis())
    view = render_view(session)
    assert view["analysis"]["risk_appetite"] == "정보 부족"
    assert view["analysis"]["is_fallback"] is True
    assert view["unavailable_text"] is None


def test_report_without_analysis_shows_unavailable():
    session = _conversing()
    session.screen = Screen.REVIEWING
    view = render_view(session)
    assert view["analysis"] is None
    assert view["unavailable_text"] == ANALYSIS_UNAVAILABLE_TEXT


def test_report_has_no_loading_state():
    session = _conversing()
    session.decision_latency_seconds = 1
    session.complete_review(fallback_analysis())
    view = render_view(session)
    assert "is_loading" not in view
    assert "loading_title" not in view
