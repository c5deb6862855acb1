"""Custom exceptions for the transcription-api service."""

from enum import Enum


class ProviderErrorKind(str, Enum):
    """Normalized failure categories across transcription providers."""

    AUTH_ERROR = "AuthError"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    TIMEOUT = "Timeout"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    UNKNOWN = "Unknown"


class ValidationError(Exception):
    """Raised when an incoming request fails validation."""

    kind = "ValidationError"
    status_code = 400


class InvalidUploadError(ValidationError):
    """Raised when the uploaded audio file is missing or not acceptable."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ProviderError(Exception):
    """Raised when a transcription provider call fails."""

    status_code = 500

    def __init__(
        self,
        provider: str,
        kind: ProviderErrorKind,
        message: str,
        cause: Exception | None = None,
    ):
        self.provider = provider
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(f"{provider}: {message}")


class TranscriptionUnavailableError(ProviderError):
    """Raised when no configured provider produced a transcript."""

    def __init__(self, errors: list[ProviderError] | None = None):
        self.errors = list(errors or [])
        if self.errors:
            attempted = ", ".join(f"{e.provider} ({e.kind.value})" for e in self.errors)
            message = f"No transcription service available; all providers failed: {attempted}"
        else:
            message = "No transcription service available; no provider is configured"
        super().__init__("none", ProviderErrorKind.UPSTREAM_UNAVAILABLE, message)


_STATUS_KINDS = {
    400: ProviderErrorKind.UNSUPPORTED_FORMAT,
    401: ProviderErrorKind.AUTH_ERROR,
    403: ProviderErrorKind.AUTH_ERROR,
    408: ProviderErrorKind.TIMEOUT,
    413: ProviderErrorKind.PAYLOAD_TOO_LARGE,
    415: ProviderErrorKind.UNSUPPORTED_FORMAT,
    429: ProviderErrorKind.UPSTREAM_UNAVAILABLE,
    500: ProviderErrorKind.UPSTREAM_UNAVAILABLE,
    502: ProviderErrorKind.UPSTREAM_UNAVAILABLE,
    503: ProviderErrorKind.UPSTREAM_UNAVAILABLE,
    504: ProviderErrorKind.TIMEOUT,
}


def classify_status(status_code: int | None) -> ProviderErrorKind:
    """Maps a provider HTTP status code onto the provider error taxonomy."""
    if status_code is None:
        return ProviderErrorKind.UNKNOWN
    return _STATUS_KINDS.get(status_code, ProviderErrorKind.UNKNOWN)
