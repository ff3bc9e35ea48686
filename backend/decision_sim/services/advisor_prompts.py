"""Advisor Prompts — system instructions and prompt templates for both advisory calls.

Invariants:
    - All strings are pure data plus formatting (no IO)
    - The advisor always answers in Korean
    - Transcript serialization labels turns 리더 / AI, one turn per line
"""

from decision_sim.core.domain_types import Speaker
from decision_sim.core.scenario_catalog import Scenario
from decision_sim.core.session_state import ConversationTurn


ADVISOR_SYSTEM_PROMPT = (
    "You are an expert business consultant and strategic advisor for a senior "
    "leader at LG Chem. Your name is 'AI Agent'. Provide concise, actionable "
    "advice based on the given scenario and user query. Structure your response "
    "into short-term and long-term recommendations if applicable. The user is "
    "Korean, so respond in Korean."
)

ANALYST_SYSTEM_PROMPT = (
    "You analyze leadership decision-making simulations. Always report your "
    "analysis by calling the record_decision_analysis tool exactly once. "
    "Write every text field in Korean."
)

_SPEAKER_LABEL: dict[Speaker, str] = {
    Speaker.LEADER: "리더",
    Speaker.ADVISOR: "AI",
}

# Filled with str.format
_ANALYSIS_PROMPT_TEMPLATE = """다음은 LG화학의 한 리더와 AI 에이전트 간의 의사결정 시뮬레이션 대화 내용입니다.

시나리오: "{scenario_line}"

대화 내용:
{conversation}

위 대화 내용을 바탕으로 리더의 의사결정 과정을 분석하여 아래 스키마에 맞춰 결과를 반환해 주세요.
- riskAppetite: 대화에서 드러난 리더의 위험 감수 성향을 평가합니다.
- expectedOutcome: 리더의 최종적인 방향성에 기반하여 단기 및 장기적 성과를 구체적인 수치로 예측합니다.
- additionalSuggestions: 의사결정을 보완하거나 실행력을 높일 수 있는 구체적인 추가 아이디어 2~3가지를 제안합니다."""


def scenario_line(scenario: Scenario) -> str:
    return f"{scenario.title}: {scenario.description}"


def frame_user_question(scenario: Scenario, question: str) -> str:
    """Wrap the leader's question with the scenario so every turn is grounded."""
    return f'시나리오: "{scenario_line(scenario)}".\n\n내 질문: "{question}"'


def serialize_transcript(transcript: list[ConversationTurn]) -> str:
    return "\n".join(
        f"{_SPEAKER_LABEL[turn.speaker]}: {turn.text}" for turn in transcript
    )


def build_analysis_prompt(
    scenario: Scenario, transcript: list[ConversationTurn],
) -> str:
    return _ANALYSIS_PROMPT_TEMPLATE.format(
        scenario_line=scenario_line(scenario),
        conversation=serialize_transcript(transcript),
    )
