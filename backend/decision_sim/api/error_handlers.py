"""Error Handlers — global exception handlers for the simulator API.

Invariants:
    - Every error body has the same envelope as SimulatorError.to_response():
      code, message, category, severity, timestamp, context {session_id, screen}
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - Context is read from the route's session_id and the live machine, if any;
      an unknown or malformed id leaves both context fields null

Design Decisions:
    - Three-layer handler: domain (SimulatorError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the entry point only wires things together
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from decision_sim.api.routes.session_lifecycle import _machines
from decision_sim.core.errors import ErrorCategory, ErrorSeverity, SimulatorError

logger = logging.getLogger(__name__)

_VALIDATION_MESSAGE = "요청 형식이 올바르지 않습니다."
_INTERNAL_MESSAGE = "예기치 않은 오류가 발생했습니다."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_simulator_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_simulator_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SimulatorError)
    async def simulator_error_handler(request: Request, exc: SimulatorError):
        """Handle all simulator domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"SimulatorError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "session_id": exc.context.session_id,
                "screen": exc.context.screen,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Reject malformed intents. The session is left untouched."""
        context = request_context(request)
        logger.warning(
            f"Invalid request: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path, **context},
        )
        body = _error_body(
            "VALIDATION_ERROR", _VALIDATION_MESSAGE,
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context,
        )
        body["error"]["details"] = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        context = request_context(request)
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path, **context},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                "INTERNAL_ERROR", _INTERNAL_MESSAGE,
                ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context,
            ),
        )


def request_context(request: Request) -> dict:
    """session_id and current screen for the session a request targets."""
    raw_id = request.path_params.get("session_id")
    try:
        machine = _machines.get(UUID(str(raw_id))) if raw_id else None
    except ValueError:
        machine = None
    if machine is None:
        return {"session_id": None, "screen": None}
    return {
        "session_id": str(machine.session_id),
        "screen": machine.session.screen.value,
    }


def _error_body(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    context: dict,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "context": context,
        },
    }
