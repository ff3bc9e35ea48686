"""Error Hierarchy — typed, categorized exceptions for all simulator failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - user_message is what the browser may show; message is for logs only
    - Advisory failures (AdvisoryAPIError, AnalysisSchemaError) are absorbed by the
      session machine and never reach the HTTP layer as raw messages

Design Decisions:
    - Single hierarchy with SimulatorError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    screen: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class SimulatorError(Exception):
    """Base exception for all simulator errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_id": self.context.session_id,
                    "screen": self.context.screen,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidTransitionError(SimulatorError):
    """Operation is not legal from the session's current screen."""
    def __init__(
        self, operation: str, screen: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.screen = screen
        super().__init__(
            f"'{operation}' is not allowed while on the '{screen}' screen",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.operation = operation


class ResourceNotFoundError(SimulatorError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(SimulatorError):
    """Required configuration is missing or invalid. Fatal at startup."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting


class AdvisoryAPIError(SimulatorError):
    """The generative-AI collaborator call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Advisory API error ({api_error_type}): {message}",
            "ADVISORY_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.api_error_type = api_error_type


class AnalysisSchemaError(SimulatorError):
    """Analysis payload was missing or violated the structured schema."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Analysis payload rejected: {message}",
            "ANALYSIS_SCHEMA_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )


class ExportError(SimulatorError):
    """Building the downloadable bundle failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "앱 다운로드에 실패했습니다."
        super().__init__(
            f"Export failed: {message}",
            "EXPORT_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, ctx, 500,
        )
