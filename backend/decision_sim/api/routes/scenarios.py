"""Scenario Catalog route — read-only listing of the training scenarios."""

from fastapi import APIRouter

from decision_sim.core.scenario_catalog import list_scenarios
from decision_sim.core.views import render_scenario
from decision_sim.schemas.views import ScenarioCard

router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


@router.get("", response_model=list[ScenarioCard])
async def get_scenarios():
    return [render_scenario(s) for s in list_scenarios()]
