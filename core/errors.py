"""Error taxonomy for calls to the generative-AI backend.

Every terminal condition reaches the caller as its own exception type so the
CLI (or any other front end) can render a specific message:

- TransientServerError / TransientNetworkError: retried by core.retry
- TerminalClientError: non-retryable HTTP failure with the server's message
- ContentBlockedError: upstream moderation rejected the prompt or output
- MalformedResponseError: successful response with an unexpected shape
- StructuredOutputError: JSON-mode output that does not parse
- RetriesExhaustedError: the attempt budget ran out
"""


class GeminiError(Exception):
    """Base error for all generative-AI backend calls."""


class ConfigurationError(GeminiError):
    """Raised when the client cannot be built from the current settings."""


class TransientServerError(GeminiError):
    """HTTP 429 or 5xx response. Retryable."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TransientNetworkError(GeminiError):
    """Transport-level failure (connection refused, DNS, interrupted I/O). Retryable."""


class TerminalClientError(GeminiError):
    """Non-retryable HTTP error (4xx other than 429)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ContentBlockedError(GeminiError):
    """Request or output rejected by upstream content policy."""

    def __init__(self, reason: str):
        super().__init__(f"Content generation blocked. Reason: {reason}.")
        self.reason = reason


class MalformedResponseError(GeminiError):
    """Successful HTTP response whose payload is missing expected fields."""


class StructuredOutputError(GeminiError):
    """JSON-mode response text could not be parsed as JSON."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class RetriesExhaustedError(GeminiError):
    """All attempts failed with retryable errors."""

    def __init__(self, attempts: int, last_error: Exception | None, description: str = "request"):
        super().__init__(f"Max retries ({attempts}) reached for {description}: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


__all__ = [
    "ConfigurationError",
    "ContentBlockedError",
    "GeminiError",
    "MalformedResponseError",
    "RetriesExhaustedError",
    "StructuredOutputError",
    "TerminalClientError",
    "TransientNetworkError",
    "TransientServerError",
]
