"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up
    - Reports the number of live in-memory sessions (no external checks:
      the simulator has no database)
"""

import logging
from fastapi import APIRouter, status

from decision_sim.api.routes.session_lifecycle import _machines

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "decision-sim-api",
        "version": "1.0.0",
        "active_sessions": len(_machines),
    }
