"""Advisory Client — the two requests the simulator makes to the generative-AI collaborator.

Invariants:
    - Both operations return an AdvisoryOutcome; remote failures never raise out of here
    - converse: leader turns map to role "user", advisor turns to role "assistant"
    - converse: the trailing leader turn carrying new_message is sent once, framed
      with the scenario, never duplicated in the history
    - analyze: payload must pass AnalysisPayload validation or the outcome fails
    - Single-shot: no retry, caching, or de-duplication (responses are non-deterministic)

Design Decisions:
    - Result type over exceptions at the call site: failure policy (apology turn,
      fallback analysis) lives in the session machine alone
    - Adjacent same-role turns merged: the Messages API requires alternating roles,
      and an apology followed by another apology must not break the next request
"""

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import ValidationError

from decision_sim.core.domain_types import Speaker
from decision_sim.core.errors import (
    AdvisoryAPIError,
    AnalysisSchemaError,
    ErrorContext,
    SimulatorError,
)
from decision_sim.core.scenario_catalog import Scenario
from decision_sim.core.session_state import AnalysisResult, ConversationTurn
from decision_sim.infrastructure.anthropic_client import AnthropicClient
from decision_sim.schemas.analysis import AnalysisPayload
from decision_sim.services.advisor_prompts import (
    ADVISOR_SYSTEM_PROMPT,
    ANALYST_SYSTEM_PROMPT,
    build_analysis_prompt,
    frame_user_question,
)
from decision_sim.services.define_analysis_tool import (
    ANALYSIS_TOOL,
    ANALYSIS_TOOL_NAME,
    FORCED_ANALYSIS_CHOICE,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ROLE_FOR_SPEAKER: dict[Speaker, str] = {
    Speaker.LEADER: "user",
    Speaker.ADVISOR: "assistant",
}


@dataclass(frozen=True)
class AdvisoryOutcome(Generic[T]):
    """Success-or-failure result of one advisory request."""
    value: T | None = None
    error: SimulatorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "AdvisoryOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: SimulatorError) -> "AdvisoryOutcome[T]":
        return cls(error=error)


class AdvisoryClient:
    """Builds requests for the advisor and analyst, maps responses to domain values."""

    def __init__(
        self,
        client: AnthropicClient,
        model: str,
        advisor_max_tokens: int = 2048,
        analysis_max_tokens: int = 1024,
    ):
        self.client = client
        self.model = model
        self.advisor_max_tokens = advisor_max_tokens
        self.analysis_max_tokens = analysis_max_tokens

    async def converse(
        self,
        scenario: Scenario,
        transcript: list[ConversationTurn],
        new_message: str,
        context: ErrorContext | None = None,
    ) -> AdvisoryOutcome[str]:
        """Ask the advisor for the next reply. Free text in, free text out."""
        messages = build_conversation_messages(scenario, transcript, new_message)
        try:
            response = await self.client.create_message(
                model=self.model,
                max_tokens=self.advisor_max_tokens,
                system=ADVISOR_SYSTEM_PROMPT,
                messages=messages,
                context=context,
            )
        except SimulatorError as e:
            return AdvisoryOutcome.failure(e)

        text = _extract_text(response)
        if not text:
            return AdvisoryOutcome.failure(
                AdvisoryAPIError("Empty advisor reply", "empty_response", context=context),
            )
        return AdvisoryOutcome.success(text)

    async def analyze(
        self,
        scenario: Scenario,
        transcript: list[ConversationTurn],
        context: ErrorContext | None = None,
    ) -> AdvisoryOutcome[AnalysisResult]:
        """Request the structured end-of-session analysis."""
        prompt = build_analysis_prompt(scenario, transcript)
        try:
            response = await self.client.create_message(
                model=self.model,
                max_tokens=self.analysis_max_tokens,
                system=ANALYST_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
                tools=[ANALYSIS_TOOL],
                tool_choice=FORCED_ANALYSIS_CHOICE,
                context=context,
            )
        except SimulatorError as e:
            return AdvisoryOutcome.failure(e)

        try:
            return AdvisoryOutcome.success(parse_analysis(response, context))
        except AnalysisSchemaError as e:
            logger.warning(
                f"Analysis payload rejected: {e.message}",
                extra={"error_code": e.code},
            )
            return AdvisoryOutcome.failure(e)


def build_conversation_messages(
    scenario: Scenario,
    transcript: list[ConversationTurn],
    new_message: str,
) -> list[dict]:
    """Role-tagged history followed by the scenario-framed new question."""
    history = list(transcript)
    if (
        history
        and history[-1].speaker == Speaker.LEADER
        and history[-1].text == new_message
    ):
        history = history[:-1]

    messages: list[dict] = []
    for turn in history:
        _append_merged(messages, _ROLE_FOR_SPEAKER[turn.speaker], turn.text)
    _append_merged(messages, "user", frame_user_question(scenario, new_message))

    # The Messages API requires the conversation to open with a user turn
    if messages[0]["role"] != "user":
        messages.insert(0, {"role": "user", "content": "(대화 시작)"})
    return messages


def _append_merged(messages: list[dict], role: str, text: str) -> None:
    if messages and messages[-1]["role"] == role:
        messages[-1]["content"] = f"{messages[-1]['content']}\n\n{text}"
        return
    messages.append({"role": role, "content": text})


def _extract_text(response) -> str:
    parts = [
        block.text for block in response.content
        if getattr(block, "type", None) == "text"
    ]
    return "".join(parts).strip()


def parse_analysis(response, context: ErrorContext | None = None) -> AnalysisResult:
    """Pull the forced tool call out of the response and validate it."""
    block = next(
        (
            b for b in response.content
            if getattr(b, "type", None) == "tool_use"
            and getattr(b, "name", None) == ANALYSIS_TOOL_NAME
        ),
        None,
    )
    if block is None:
        raise AnalysisSchemaError("response contained no analysis tool call", context)

    payload = block.input
    if not isinstance(payload, dict):
        raise AnalysisSchemaError("tool input is not an object", context)

    try:
        return AnalysisPayload.model_validate(payload).to_result()
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
        )
        raise AnalysisSchemaError(f"invalid fields: {fields}", context) from e
