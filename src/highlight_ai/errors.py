"""Exceptions raised by highlight-ai.

Config and selection failures are absorbed at their component boundary
(``load_config`` falls back to defaults, ``capture_selection`` returns an
empty string). Completion failures always reach the caller as one of the
``CompletionError`` subclasses below, each tagged with a ``kind``.
"""

RESPONSE_EXCERPT_LENGTH = 200


class HighlightAIError(Exception):
    """Base exception for highlight-ai."""


class ConfigIOError(HighlightAIError):
    """Raised when the configuration record cannot be written."""


class ConfigParseError(HighlightAIError):
    """Raised when the persisted configuration record is malformed."""


class SelectionCaptureError(HighlightAIError):
    """Raised when a clipboard or synthetic-copy step fails."""


class CompletionError(HighlightAIError):
    """Base class for failures talking to the inference endpoint."""

    kind = "completion"

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)


class TransportError(CompletionError):
    """Raised when the endpoint cannot be reached (refused, DNS, network)."""

    kind = "transport"

    def __init__(self, base_url: str, detail: str = ""):
        self.base_url = base_url
        message = (
            f"Could not connect to the inference server at {base_url}. "
            "Make sure it is running and the server is started."
        )
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, detail)


class CompletionTimeoutError(CompletionError):
    """Raised when the request exceeds its timeout."""

    kind = "timeout"

    def __init__(self, base_url: str, timeout: float):
        self.base_url = base_url
        self.timeout = timeout
        super().__init__(
            f"Request to {base_url} timed out after {timeout:g} seconds. "
            "The server might be slow or not responding.",
            f"timeout={timeout:g}s",
        )


class ProtocolError(CompletionError):
    """Raised on a non-2xx HTTP status."""

    kind = "protocol"

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.body_excerpt = body[:RESPONSE_EXCERPT_LENGTH]
        super().__init__(
            f"Inference server error: {status_code} {reason}".rstrip()
            + f"\nResponse: {self.body_excerpt}",
            self.body_excerpt,
        )


class ResponseParseError(CompletionError):
    """Raised when a 2xx response body is not valid JSON."""

    kind = "parse"

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse response: {detail}", detail)


class EmptyResponseError(CompletionError):
    """Raised when a 2xx JSON response carries no usable completion."""

    kind = "empty_response"

    def __init__(self, detail: str = ""):
        super().__init__(
            "Invalid response from inference server - no choices found", detail
        )
