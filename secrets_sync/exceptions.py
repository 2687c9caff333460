"""secrets-sync exception classes."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from secrets_sync.types.audit import UnitFailure


class SecretsSyncError(Exception):
    """Base exception for all secrets-sync errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(SecretsSyncError):
    """Raised when the run configuration is invalid, or matches nothing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(SecretsSyncError):
    """Raised when the token is rejected (401)."""

    pass


class AuthorizationError(SecretsSyncError):
    """Raised when access is denied (403 that is not a rate limit)."""

    pass


class NotFoundError(SecretsSyncError):
    """Raised when a resource is not found."""

    pass


class ConflictError(SecretsSyncError):
    """Raised on conflicts (variable already exists, etc.)."""

    pass


class RateLimitedError(SecretsSyncError):
    """Raised when rate limited or when abuse detection kicks in."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(SecretsSyncError):
    """Raised on validation errors (422 and other client errors)."""

    pass


class ServerError(SecretsSyncError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class BatchError(SecretsSyncError):
    """
    Raised once every unit of a batch has settled and at least one failed.

    Carries every failure, not only the first one.
    """

    def __init__(self, failures: "list[UnitFailure]") -> None:
        self.failures = failures
        super().__init__(
            "BATCH_FAILED",
            f"{len(failures)} unit(s) failed: "
            + "; ".join(str(failure) for failure in failures),
        )
