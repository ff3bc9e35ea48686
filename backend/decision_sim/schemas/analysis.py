"""Analysis Schema — validates the structured analysis payload returned by the LLM.

Invariants:
    - riskAppetite must be one of the four RiskAppetite labels
    - expectedOutcome must be a string; additionalSuggestions a list of strings
    - All three fields required under their camelCase wire names; snake_case
      keys count as missing. Unknown fields ignored

Design Decisions:
    - Validated at the system boundary (LLM output) like any other untrusted input
    - Field aliases keep the wire names camelCase while Python stays snake_case
"""

from pydantic import BaseModel, ConfigDict, Field

from decision_sim.core.domain_types import RiskAppetite
from decision_sim.core.session_state import AnalysisResult


class AnalysisPayload(BaseModel):
    """Tool input emitted by the analysis call."""
    model_config = ConfigDict(extra="ignore")

    risk_appetite: RiskAppetite = Field(alias="riskAppetite")
    expected_outcome: str = Field(alias="expectedOutcome")
    additional_suggestions: list[str] = Field(alias="additionalSuggestions")

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            risk_appetite=self.risk_appetite,
            expected_outcome=self.expected_outcome,
            suggestions=tuple(self.additional_suggestions),
        )
