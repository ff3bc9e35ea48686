"""Anthropic Client — wraps AsyncAnthropic with error mapping and usage logging.

Invariants:
    - Single-shot: this wrapper never retries (the SDK's own max_retries applies)
    - No timeout enforced here: the SDK timeout from settings governs deadlines
    - All SDK failures mapped to AdvisoryAPIError (core/errors.py)
    - Rate limits carry retry_after_ms when the Retry-After header is present

Design Decisions:
    - Wrapper over raw client: isolates SDK exception types from the advisory client
    - tools/tool_choice only sent when given: plain chat turns stay minimal
"""

import logging

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from decision_sim.core.errors import AdvisoryAPIError, ErrorContext

logger = logging.getLogger(__name__)

# OverloadedError (HTTP 529) is not re-exported by every SDK version.
# Detect via status code on APIStatusError instead of relying on private import.
_OVERLOADED_STATUS = 529


def _is_overloaded(e: APIError) -> bool:
    """Check if error is Anthropic 529 Overloaded."""
    return isinstance(e, APIStatusError) and e.status_code == _OVERLOADED_STATUS


class AnthropicClient:
    """Wraps the Anthropic SDK client with error mapping."""

    def __init__(
        self,
        api_key: str,
        max_retries: int = 2,
        timeout_seconds: int = 120,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout_seconds,
        )

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        messages: list,
        tools: list | None = None,
        tool_choice: dict | None = None,
        context: ErrorContext | None = None,
    ):
        """Create one message. Raises AdvisoryAPIError on any failure."""
        kwargs = {
            "model": model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": messages,
        }
        if tools:
            kwargs["tools"] = tools
        if tool_choice:
            kwargs["tool_choice"] = tool_choice

        # APITimeoutError subclasses APIConnectionError; 529 may surface as
        # InternalServerError on older SDKs. Order of clauses matters.
        try:
            response = await self.client.messages.create(**kwargs)
        except APITimeoutError as e:
            raise AdvisoryAPIError(
                "API timeout", "timeout", context=context,
            ) from e
        except RateLimitError as e:
            raise AdvisoryAPIError(
                "Rate limit exceeded",
                "rate_limit",
                retry_after_ms=self._extract_retry_after(e),
                context=context,
            ) from e
        except APIError as e:
            if _is_overloaded(e):
                raise AdvisoryAPIError(
                    "Anthropic API overloaded (529)", "overloaded", context=context,
                ) from e
            if isinstance(e, (APIConnectionError, InternalServerError)):
                raise AdvisoryAPIError(
                    f"Connection error: {e}", "connection_error", context=context,
                ) from e
            raise AdvisoryAPIError(
                str(e), "client_error", context=context,
            ) from e
        except Exception as e:
            logger.error(f"Unexpected Anthropic error: {e}", exc_info=True)
            raise AdvisoryAPIError(str(e), "unknown", context=context) from e

        self._log_success(response, context)
        return response

    def _log_success(self, response, context: ErrorContext | None) -> None:
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "session_id": context.session_id if context else None,
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        response = getattr(error, "response", None)
        if response is None:
            return None
        val = response.headers.get("retry-after")
        if not val:
            return None
        try:
            return int(float(val) * 1000)
        except ValueError:
            return None
