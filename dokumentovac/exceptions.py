"""Custom exception hierarchy for Dokumentovač.

Every failure the documents view can hit falls into one of four buckets, and
the presenter decides how to surface each of them:

Exception Hierarchy:
    DokumentovacError (base)
    ├── UnauthenticatedError - no token at dispatch time, never hits the network
    ├── ServiceError - the document service answered with an error status
    │   └── ServiceConnectionError (retryable) - transport failure or timeout
    ├── ValidationError - client-side input check failed before dispatch
    ├── UserCancelledError - the user declined a confirmation
    └── ConfigurationError - settings/environment issues

Nothing here is retried automatically. ``retryable`` only tells the caller
that a user-initiated retry might succeed.

Usage:
    from dokumentovac.exceptions import ServiceError

    try:
        page = await client.list_documents(token, params)
    except ServiceError as e:
        notify(e.user_message(DOCUMENTS_LOAD_FAILED))
"""

from typing import Any, Optional


class DokumentovacError(Exception):
    """Base exception for all Dokumentovač errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, URLs)
        retryable: Whether a user-initiated retry might succeed
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class UnauthenticatedError(DokumentovacError):
    """No credential token was available when an operation was dispatched."""

    def __init__(self, message: str = "Not authenticated", **context: Any) -> None:
        super().__init__(message, **context)


# =============================================================================
# Service Errors
# =============================================================================


class ServiceError(DokumentovacError):
    """The document service rejected a request.

    ``payload_message`` holds the ``message`` field of the service's JSON
    error body when one was present.
    """

    def __init__(
        self,
        message: str = "Document service request failed",
        *,
        status_code: Optional[int] = None,
        payload_message: Optional[str] = None,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.status_code = status_code
        self.payload_message = payload_message
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, retryable=retryable, **context)

    def user_message(self, fallback: str) -> str:
        """Message to show the user: the service's own text, else ``fallback``."""
        return self.payload_message or fallback


class ServiceConnectionError(ServiceError):
    """The document service could not be reached or timed out."""

    def __init__(
        self,
        message: str = "Document service unreachable",
        *,
        url: Optional[str] = None,
        **context: Any,
    ) -> None:
        if url:
            context["url"] = url
        super().__init__(message, retryable=True, **context)


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(DokumentovacError):
    """Client-side validation failed; the request was never sent."""

    def __init__(
        self,
        message: str = "Invalid input",
        *,
        field: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.field = field
        super().__init__(message, **context)

    def __str__(self) -> str:
        return self.message


class UserCancelledError(DokumentovacError):
    """The user declined a confirmation prompt."""

    def __init__(self, message: str = "Cancelled by user", **context: Any) -> None:
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DokumentovacError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
