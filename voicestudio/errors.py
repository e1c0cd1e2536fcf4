"""Domain exceptions for request validation, voice configuration, providers, and CLI."""

from __future__ import annotations


class StudioError(RuntimeError):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        """Initialize the error with a message safe to return to clients."""

        super().__init__(message)
        self.message = message


class ValidationError(StudioError):
    """Raised when a synthesis request is missing or has oversized fields."""

    status_code = 400


class ConfigurationError(StudioError):
    """Raised when a gender/style combination is unsupported in strict mode."""

    status_code = 400


class ProviderError(StudioError):
    """Raised when a TTS provider request fails or returns malformed output."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        failure_kind: str = "unknown",
        status_code: int | None = None,
        provider_code: str | None = None,
    ) -> None:
        """Initialize provider error metadata for diagnostics and logging."""

        super().__init__(message)
        self.failure_kind = failure_kind
        self.upstream_status = status_code
        self.provider_code = provider_code


class CommandError(RuntimeError):
    """Raised when a CLI command fails at a specific stage."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
