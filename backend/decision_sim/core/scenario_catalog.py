"""Scenario Catalog — the closed, hand-authored set of training scenarios.

Invariants:
    - Scenarios are frozen: created once at import, never mutated
    - Catalog order is display order; the first entry is the default selection
    - Scenario ids are unique
"""

from dataclasses import dataclass

from decision_sim.core.domain_types import ScenarioCategory, ScenarioId


@dataclass(frozen=True)
class Scenario:
    id: ScenarioId
    category: ScenarioCategory
    title: str
    description: str


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        id=ScenarioId("crisis_1"),
        category=ScenarioCategory.CRISIS,
        title="원재료 가격 30% 급등",
        description=(
            "글로벌 원재료 공급망 혼란으로 인해, 핵심 원재료 가격이 30% 상승했습니다. "
            "당장 조치하지 않으면 2분기 마진이 20% 하락할 것으로 예상됩니다."
        ),
    ),
    Scenario(
        id=ScenarioId("opportunity_1"),
        category=ScenarioCategory.OPPORTUNITY,
        title="경쟁사 기술 특허 만료",
        description=(
            "주요 경쟁사의 핵심 기술 특허가 만료되었습니다. "
            "이를 활용하여 시장 점유율을 확대할 수 있는 절호의 기회입니다."
        ),
    ),
    Scenario(
        id=ScenarioId("org_1"),
        category=ScenarioCategory.ORGANIZATION,
        title="핵심 인재 이탈",
        description=(
            "차세대 성장 동력으로 점찍은 신사업팀의 핵심 인재 3명이 경쟁사로 이직했습니다. "
            "프로젝트 지연 및 팀 사기 저하가 우려되는 상황입니다."
        ),
    ),
    Scenario(
        id=ScenarioId("env_1"),
        category=ScenarioCategory.ENVIRONMENT,
        title="글로벌 탄소 규제 강화",
        description=(
            "주요 수출국의 탄소 국경세 도입이 확정되었습니다. "
            "이에 따라 생산 공정의 탄소 배출량 감축이 시급한 과제로 떠올랐습니다."
        ),
    ),
)

_BY_ID: dict[str, Scenario] = {s.id: s for s in SCENARIOS}


def list_scenarios() -> tuple[Scenario, ...]:
    return SCENARIOS


def default_scenario() -> Scenario:
    return SCENARIOS[0]


def find_scenario(scenario_id: str) -> Scenario | None:
    """Lookup by id. None for unknown ids — caller decides how to report."""
    return _BY_ID.get(scenario_id)
