"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionId wraps UUID — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Korean labels are the enum VALUES (they travel to the LLM and the UI verbatim)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (tool schemas and API payloads are JSON)
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", UUID)
ScenarioId = NewType("ScenarioId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Screen(str, Enum):
    """The three mutually exclusive screens — one per state machine state."""
    SELECTING = "selecting"
    CONVERSING = "conversing"
    REVIEWING = "reviewing"


class ScenarioCategory(str, Enum):
    """Closed set of scenario categories."""
    CRISIS = "위기"
    OPPORTUNITY = "기회"
    ORGANIZATION = "조직"
    ENVIRONMENT = "환경"


class Speaker(str, Enum):
    """Who authored a conversation turn."""
    LEADER = "leader"
    ADVISOR = "advisor"


class RiskAppetite(str, Enum):
    """Risk appetite labels the analysis may assign."""
    LOW = "낮음"
    MEDIUM = "중간"
    HIGH = "높음"
    INSUFFICIENT_INFO = "정보 부족"
