"""Agile Decision Simulator API — FastAPI application entry point.

Invariants:
    - Settings are validated at import: a missing API key raises ConfigurationError
      before the app object exists, so nothing can render without a credential
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SimulatorError → structured JSON responses
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static front-end mounted AFTER API routes so /api/v1/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from decision_sim.api.error_handlers import register_error_handlers
from decision_sim.api.routes import (
    export,
    health,
    scenarios,
    session_actions,
    session_lifecycle,
)
from decision_sim.config import get_settings
from decision_sim.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Decision simulator API started")
    yield
    logger.info("Decision simulator API shutting down")


app = FastAPI(
    title="Agile Decision Simulator API", version="1.0.0", lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(scenarios.router)
app.include_router(session_lifecycle.router)
app.include_router(session_actions.router)
app.include_router(export.router)

register_error_handlers(app)

# html=True enables SPA fallback (serves index.html for unknown routes)
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
