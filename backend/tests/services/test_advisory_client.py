"""Advisory Client Tests — request shaping and response parsing against a mock transport.

Invariants:
    - converse maps leader → user, advisor → assistant and frames the new question once
    - converse/analyze never raise for remote failures: they return failed outcomes
    - analyze accepts only payloads that pass AnalysisPayload validation
"""

from decision_sim.core.domain_types import RiskAppetite, Speaker
from decision_sim.core.errors import AdvisoryAPIError, AnalysisSchemaError
from decision_sim.core.scenario_catalog import list_scenarios
from decision_sim.core.session_state import ConversationTurn
from decision_sim.services.advisor_prompts import ADVISOR_SYSTEM_PROMPT
from decision_sim.services.advisory_client import build_conversation_messages
from decision_sim.services.define_analysis_tool import ANALYSIS_TOOL_NAME

from tests.services.mock_anthropic import (
    _Block,
    _Message,
    analysis_response,
    text_response,
    valid_analysis_payload,
)

SCENARIO = list_scenarios()[0]


def _turns(*pairs):
    return [ConversationTurn(speaker=s, text=t) for s, t in pairs]


# -- build_conversation_messages (pure) ----------------------------------------


def test_first_message_is_framed_with_scenario():
    transcript = _turns((Speaker.LEADER, "질문"))
    messages = build_conversation_messages(SCENARIO, transcript, "질문")
    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    assert SCENARIO.title in messages[0]["content"]
    assert '내 질문: "질문"' in messages[0]["content"]


def test_history_roles_alternate():
    transcript = _turns(
        (Speaker.LEADER, "q1"),
        (Speaker.ADVISOR, "a1"),
        (Speaker.LEADER, "q2"),
    )
    messages = build_conversation_messages(SCENARIO, transcript, "q2")
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[0]["content"] == "q1"
    assert messages[1]["content"] == "a1"
    assert "q2" in messages[2]["content"]


def test_new_message_not_duplicated_in_history():
    transcript = _turns((Speaker.LEADER, "q1"), (Speaker.ADVISOR, "a1"), (Speaker.LEADER, "q2"))
    messages = build_conversation_messages(SCENARIO, transcript, "q2")
    assert sum("q2" in m["content"] for m in messages) == 1


def test_same_role_turns_are_merged():
    # The Messages API rejects two consecutive turns with the same role
    transcript = _turns(
        (Speaker.LEADER, "q1"),
        (Speaker.LEADER, "q1-again"),
        (Speaker.ADVISOR, "a1"),
    )
    messages = build_conversation_messages(SCENARIO, transcript, "q2")
    roles = [m["role"] for m in messages]
    assert roles == ["user", "assistant", "user"]
    assert "q1-again" in messages[0]["content"]


# -- converse ------------------------------------------------------------------


async def test_converse_returns_reply_text(advisory, mock_llm):
    mock_llm._responses.append(text_response("장기적으로는 공급망을 다변화하세요."))
    transcript = _turns((Speaker.LEADER, "질문"))

    outcome = await advisory.converse(SCENARIO, transcript, "질문")

    assert outcome.ok
    assert outcome.value == "장기적으로는 공급망을 다변화하세요."
    call = mock_llm.calls[0]
    assert call["system"] == ADVISOR_SYSTEM_PROMPT
    assert call["model"] == "test-model"
    assert "tools" not in call


async def test_converse_transport_failure_is_failed_outcome(advisory, mock_llm):
    mock_llm._responses.append(AdvisoryAPIError("down", "connection_error"))

    outcome = await advisory.converse(SCENARIO, _turns((Speaker.LEADER, "q")), "q")

    assert not outcome.ok
    assert isinstance(outcome.error, AdvisoryAPIError)


async def test_converse_empty_reply_is_failed_outcome(advisory, mock_llm):
    mock_llm._responses.append(text_response("   "))

    outcome = await advisory.converse(SCENARIO, _turns((Speaker.LEADER, "q")), "q")

    assert not outcome.ok
    assert outcome.error.api_error_type == "empty_response"


# -- analyze -------------------------------------------------------------------


async def test_analyze_parses_forced_tool_call(advisory, mock_llm):
    mock_llm._responses.append(analysis_response(valid_analysis_payload()))
    transcript = _turns((Speaker.LEADER, "가격 인상"), (Speaker.ADVISOR, "좋습니다"))

    outcome = await advisory.analyze(SCENARIO, transcript)

    assert outcome.ok
    assert outcome.value.risk_appetite == RiskAppetite.MEDIUM
    assert len(outcome.value.suggestions) == 2
    call = mock_llm.calls[0]
    assert call["tool_choice"] == {"type": "tool", "name": ANALYSIS_TOOL_NAME}
    prompt = call["messages"][0]["content"]
    assert "리더: 가격 인상" in prompt
    assert "AI: 좋습니다" in prompt


async def test_analyze_without_tool_call_fails(advisory, mock_llm):
    mock_llm._responses.append(text_response('{"riskAppetite": "높음"}'))

    outcome = await advisory.analyze(SCENARIO, _turns((Speaker.LEADER, "q")))

    assert not outcome.ok
    assert isinstance(outcome.error, AnalysisSchemaError)


async def test_analyze_out_of_enum_fails(advisory, mock_llm):
    payload = valid_analysis_payload() | {"riskAppetite": "Very High"}
    mock_llm._responses.append(analysis_response(payload))

    outcome = await advisory.analyze(SCENARIO, _turns((Speaker.LEADER, "q")))

    assert not outcome.ok
    assert outcome.error.code == "ANALYSIS_SCHEMA_ERROR"


async def test_analyze_snake_case_keys_fail(advisory, mock_llm):
    mock_llm._responses.append(analysis_response({
        "risk_appetite": "높음",
        "expected_outcome": "단기 손실 -3%",
        "additional_suggestions": ["a", "b"],
    }))

    outcome = await advisory.analyze(SCENARIO, _turns((Speaker.LEADER, "q")))

    assert not outcome.ok
    assert isinstance(outcome.error, AnalysisSchemaError)
    assert "riskAppetite" in outcome.error.message


async def test_analyze_non_object_input_fails(advisory, mock_llm):
    mock_llm._responses.append(_Message([
        _Block(type="tool_use", id="t", name=ANALYSIS_TOOL_NAME, input="not json"),
    ]))

    outcome = await advisory.analyze(SCENARIO, _turns((Speaker.LEADER, "q")))

    assert not outcome.ok


async def test_analyze_accepts_four_suggestions(advisory, mock_llm):
    payload = valid_analysis_payload() | {"additionalSuggestions": ["a", "b", "c", "d"]}
    mock_llm._responses.append(analysis_response(payload))

    outcome = await advisory.analyze(SCENARIO, _turns((Speaker.LEADER, "q")))

    assert outcome.ok
    assert outcome.value.suggestions == ("a", "b", "c", "d")
