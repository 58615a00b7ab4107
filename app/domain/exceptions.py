"""Domain exceptions for the TuneTribe backend.

Defines domain-level exceptions that represent business rule violations
and upstream failures. These exceptions are independent of HTTP concerns;
app.core.exception_handlers maps them to JSON responses.
"""

from typing import Any


class TuneTribeException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, user_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TuneTribeException):
    """Raised when a required input is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class CodeAlreadyUsedException(TuneTribeException):
    """Raised when an authorization code was already exchanged (or is being exchanged)."""

    def __init__(self) -> None:
        super().__init__(
            "Authorization code has already been used.",
            "CODE_ALREADY_USED",
        )


class ResourceNotFoundException(TuneTribeException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user-profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SourceQueryFailedException(TuneTribeException):
    """Raised when the record source (or one of its sub-queries) fails or times out."""

    def __init__(self, kind: str, user_id: str, reason: str) -> None:
        """Initialize with the resource kind, user and a short reason.

        Args:
            kind: Resource kind or sub-query name being fetched.
            user_id: User whose records were requested.
            reason: Short, non-sensitive description (e.g. exception class name).
        """
        super().__init__(
            f"Failed to fetch {kind}",
            "SOURCE_QUERY_FAILED",
            {"kind": kind, "user_id": user_id, "reason": reason},
        )


class CacheUnavailableException(TuneTribeException):
    """Raised when a cache write that cannot be skipped (e.g. invalidation) fails."""

    def __init__(self, operation: str, key: str) -> None:
        super().__init__(
            f"Cache unavailable for {operation}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "key": key},
        )


class ProviderException(TuneTribeException):
    """Raised when the OAuth provider rejects a request.

    The provider's status code and JSON payload are preserved so the
    presentation layer can pass them through unchanged.
    """

    def __init__(self, status_code: int, payload: Any) -> None:
        """Initialize with the provider's HTTP status and decoded body.

        Args:
            status_code: HTTP status returned by the provider.
            payload: Decoded JSON body (or {"error": <text>} when not JSON).
        """
        self.status_code = status_code
        self.payload = payload
        super().__init__(
            f"OAuth provider returned {status_code}",
            "PROVIDER_ERROR",
            {"status_code": status_code},
        )


class ProviderUnavailableException(TuneTribeException):
    """Raised when an upstream HTTP service cannot be reached or times out."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(
            f"{provider} is unavailable",
            "PROVIDER_UNAVAILABLE",
            {"provider": provider, "reason": reason},
        )


class MissingRefreshTokenException(TuneTribeException):
    """Raised when no stored refresh token exists for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            "No refresh token found for user",
            "MISSING_REFRESH_TOKEN",
            {"user_id": user_id},
        )


class InvalidOtpException(TuneTribeException):
    """Raised when a password-reset OTP is wrong, expired, or was already used."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired OTP", "INVALID_OTP")


class EmailDeliveryException(TuneTribeException):
    """Raised when an outbound email cannot be delivered."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Failed to send email",
            "EMAIL_DELIVERY_FAILED",
            {"reason": reason},
        )


class SqlNotConfiguredException(TuneTribeException):
    """Raised when an operation requires the record source but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class LyricsFetchException(TuneTribeException):
    """Raised when the lyrics search API cannot be reached or returns non-JSON."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Failed to fetch lyrics",
            "LYRICS_FETCH_FAILED",
            {"reason": reason},
        )
