"""Presentation Views — pure rendering of a Session into one of three screen payloads.

Invariants:
    - render_view is a pure function of the Session (no IO, no clock, no mutation)
    - Exactly one screen payload per Screen value; "screen" key discriminates
    - can_send / can_finalize are false while any advisory request is pending
    - The analysis spinner belongs to the conversation screen: the report screen
      is only reached once an analysis (real or fallback) exists
    - Error paths render the literal fallback texts, never technical messages

Design Decisions:
    - Plain dicts, not Pydantic: core stays dependency-free; schemas/views.py
      validates the same shape at the API boundary
    - Colour keys instead of CSS classes: styling belongs to the front-end
"""

from decision_sim.core.decision_timing import format_decision_speed
from decision_sim.core.domain_types import RiskAppetite, ScenarioCategory, Screen
from decision_sim.core.scenario_catalog import Scenario, default_scenario, list_scenarios
from decision_sim.core.session_state import Session


SELECTION_HEADING = "시나리오 선택"
SELECTION_SUBHEADING = "훈련할 의사결정 시나리오를 선택하세요."
FIRST_QUESTION_PLACEHOLDER = '"AI, 단기적 손실 최소화 및 장기 경쟁력 유지 방안은?"'
FOLLOW_UP_PLACEHOLDER = "AI에게 질문하기..."
REPLY_LOADING_TEXT = "AI가 응답을 생성 중입니다..."
REPORT_HEADING = "의사결정 분석 리포트"
ANALYSIS_LOADING_TITLE = "의사결정 분석 중..."
ANALYSIS_LOADING_TEXT = "AI가 대화 내용을 바탕으로 리더십을 분석하고 있습니다."
ANALYSIS_UNAVAILABLE_TITLE = "분석 결과를 불러올 수 없습니다."
ANALYSIS_UNAVAILABLE_TEXT = "네트워크 오류 또는 예기치 않은 문제 발생"

_CATEGORY_COLOR: dict[ScenarioCategory, str] = {
    ScenarioCategory.CRISIS: "red",
    ScenarioCategory.OPPORTUNITY: "green",
    ScenarioCategory.ORGANIZATION: "yellow",
    ScenarioCategory.ENVIRONMENT: "blue",
}

_RISK_COLOR: dict[RiskAppetite, str] = {
    RiskAppetite.HIGH: "red",
    RiskAppetite.MEDIUM: "yellow",
    RiskAppetite.LOW: "green",
    RiskAppetite.INSUFFICIENT_INFO: "gray",
}


def render_view(session: Session) -> dict:
    """Dispatch to the renderer for the session's current screen."""
    match session.screen:
        case Screen.CONVERSING:
            return _render_conversation(session)
        case Screen.REVIEWING:
            return _render_report(session)
        case _:
            return _render_selection()


def render_scenario(scenario: Scenario) -> dict:
    return {
        "id": scenario.id,
        "category": scenario.category.value,
        "title": scenario.title,
        "description": scenario.description,
        "color": _CATEGORY_COLOR[scenario.category],
    }


def _render_selection() -> dict:
    return {
        "screen": Screen.SELECTING.value,
        "heading": SELECTION_HEADING,
        "subheading": SELECTION_SUBHEADING,
        "scenarios": [render_scenario(s) for s in list_scenarios()],
        "default_scenario_id": default_scenario().id,
    }


def _render_conversation(session: Session) -> dict:
    has_turns = session.turn_count > 0
    return {
        "screen": Screen.CONVERSING.value,
        "scenario": render_scenario(session.scenario),
        "transcript": [
            {"speaker": t.speaker.value, "text": t.text}
            for t in session.transcript
        ],
        "placeholder": (
            FOLLOW_UP_PLACEHOLDER if has_turns else FIRST_QUESTION_PLACEHOLDER
        ),
        "can_send": not session.is_busy,
        "can_finalize": has_turns and not session.is_busy,
        "is_loading": session.is_busy,
        "loading_title": ANALYSIS_LOADING_TITLE if session.pending else None,
        "loading_text": _conversation_loading_text(session),
    }


def _conversation_loading_text(session: Session) -> str | None:
    if session.pending:
        return ANALYSIS_LOADING_TEXT
    if session.awaiting_reply:
        return REPLY_LOADING_TEXT
    return None


def _render_report(session: Session) -> dict:
    view = {
        "screen": Screen.REVIEWING.value,
        "heading": REPORT_HEADING,
        "scenario": render_scenario(session.scenario),
        "decision_speed": (
            format_decision_speed(session.decision_latency_seconds)
            if session.decision_latency_seconds is not None else ""
        ),
        "analysis": None,
        "unavailable_title": None,
        "unavailable_text": None,
    }
    analysis = session.analysis
    if analysis is None:
        view["unavailable_title"] = ANALYSIS_UNAVAILABLE_TITLE
        view["unavailable_text"] = ANALYSIS_UNAVAILABLE_TEXT
        return view

    view["analysis"] = {
        "risk_appetite": analysis.risk_appetite.value,
        "risk_color": _RISK_COLOR[analysis.risk_appetite],
        "expected_outcome": analysis.expected_outcome,
        "suggestions": list(analysis.suggestions),
        "is_fallback": analysis.is_fallback,
    }
    return view
