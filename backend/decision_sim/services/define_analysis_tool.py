"""Define Analysis Tool — Anthropic tool schema that constrains the final analysis.

Invariants:
    - Schema follows Anthropic tool_use format
    - Required fields enforced by schema AND re-validated by schemas/analysis.py
    - riskAppetite enum is derived from RiskAppetite (single source of truth)

Design Decisions:
    - Forced tool call (tool_choice) over free-text JSON: the model must emit
      structured input, no markdown unwrapping needed
"""

from decision_sim.core.domain_types import RiskAppetite

ANALYSIS_TOOL_NAME = "record_decision_analysis"

ANALYSIS_TOOL = {
    "name": ANALYSIS_TOOL_NAME,
    "description": """Record the structured analysis of the leader's decision-making.

Call this exactly once, after reading the whole conversation. Every text value must be in Korean.""",
    "input_schema": {
        "type": "object",
        "properties": {
            "riskAppetite": {
                "type": "string",
                "description": (
                    "리더의 리스크 감수 성향. '낮음', '중간', '높음' 중 하나로 평가. "
                    "만약 판단하기에 정보가 부족하다면 '정보 부족'으로 평가."
                ),
                "enum": [r.value for r in RiskAppetite],
            },
            "expectedOutcome": {
                "type": "string",
                "description": (
                    "AI가 분석한 리더의 의사결정에 따른 예상 성과. "
                    "'단기 손실 -X%, 장기 마진 +Y%' 형식으로 구체적인 수치를 포함하여 작성."
                ),
            },
            "additionalSuggestions": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "결정의 효과를 높이거나 리스크를 줄이기 위한 2-3가지 구체적인 추가 제안."
                ),
            },
        },
        "required": ["riskAppetite", "expectedOutcome", "additionalSuggestions"],
    },
}

FORCED_ANALYSIS_CHOICE = {"type": "tool", "name": ANALYSIS_TOOL_NAME}
