"""Failures talking to Claude or reading what it sent back."""

from ..errors import CasewrightError

DEFAULT_KEY_MESSAGE = (
    "Claude cannot be reached without an API key; "
    "set ANTHROPIC_API_KEY or pass --api-key"
)


class LLMError(CasewrightError):
    """Enrichment, generation or suggestion could not get a usable reply."""


class APIKeyMissingError(LLMError):
    """No key was supplied, the key was rejected, or the SDK is not installed."""

    def __init__(self, message: str = DEFAULT_KEY_MESSAGE):
        super().__init__(message)


class APIError(LLMError):
    """The Messages API call itself failed.

    ``status_code`` is the HTTP status when the service answered, None for
    timeouts and connection failures.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class ResponseParseError(LLMError):
    """Claude answered, but not with the JSON the caller asked for.

    The full reply is kept on ``raw_response`` so it can be logged or shown.
    """

    def __init__(self, message: str, raw_response: str | None = None):
        self.raw_response = raw_response
        super().__init__(message)
