"""
Custom exceptions and error rendering for the Deal Prompt service.

Provides:
- Typed exception hierarchy for the failure modes of each endpoint
- Error context preservation for debugging upstream formatting drift
- HTTP status mapping and JSON rendering at the request boundary
"""

from typing import Any


class DealPromptError(Exception):
    """Base exception for all deal prompt errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.context = context or {}

    def summary(self) -> str:
        """Message and details without the debugging context."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message

    def __str__(self) -> str:
        if self.context:
            return f"{self.summary()} | context={self.context}"
        return self.summary()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON error body returned to clients."""
        body: dict[str, Any] = {'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


# =============================================================================
# Client Errors (400)
# =============================================================================


class InvalidInputError(DealPromptError):
    """Request body or embedded JSON could not be decoded."""

    status_code = 400


class ValidationError(DealPromptError):
    """One or more required fields are missing or empty."""

    status_code = 400

    def __init__(
        self,
        missing_fields: list[str],
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Missing required fields: {', '.join(missing_fields)}",
            context=context,
        )
        self.missing_fields = list(missing_fields)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body['missingFields'] = self.missing_fields
        return body


# =============================================================================
# Server Errors (500)
# =============================================================================


class ParseError(DealPromptError):
    """Section parser encountered ill-formed structure."""

    pass


class InternalError(DealPromptError):
    """Unexpected failure while handling a request."""

    pass


class FormattingError(InternalError):
    """Prompt rendering failed (e.g. non-numeric loan amount)."""

    pass


class ConfigurationError(DealPromptError):
    """Label table or settings could not be loaded."""

    pass


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_unexpected_error(
    exc: Exception,
    message: str,
    context: dict[str, Any] | None = None,
) -> DealPromptError:
    """
    Wrap an arbitrary exception in our typed error hierarchy.

    Client errors (4xx) pass through unchanged so their status code
    survives. Everything else becomes an InternalError whose message is the
    client-facing summary and whose details describe the cause.

    Args:
        exc: The original exception
        message: Client-facing summary (e.g. "Failed to generate prompt")
        context: Additional context for debugging

    Returns:
        DealPromptError ready to render at the request boundary
    """
    if isinstance(exc, DealPromptError) and exc.status_code < 500:
        return exc

    ctx = dict(context or {})
    ctx['error_type'] = type(exc).__name__
    if isinstance(exc, DealPromptError):
        ctx.update(exc.context)
        details = exc.summary()
    else:
        details = str(exc)
    ctx['original_error'] = details
    return InternalError(message, details=details, context=ctx)
