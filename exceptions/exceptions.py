"""
Custom exceptions for the agent logbook service.

These exceptions are intentionally simple and descriptive.
They are used across:

  - core/validation/
  - core/summarizer/
  - runtime/store/
  - runtime/api/

Every exception carries the HTTP status code it maps to, so the API layer
can render all of them with a single handler. Placing them at the project
root (exceptions/) avoids circular imports between core and runtime.
"""


class LogbookError(Exception):
    """Base class for every error raised by the logbook service."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(LogbookError):
    """
    Raised for client-caused problems (bad identifier, malformed body,
    missing field). Never retried.
    """

    status_code = 400


class InvalidAgentIdError(InvalidRequestError):
    """
    Raised when an agent identifier does not match ^[A-Za-z0-9_-]+$.

    The rejected value is kept for logging only; it must never be used to
    build a filesystem path.
    """

    def __init__(self, agent_id):
        self.agent_id = agent_id
        super().__init__("Invalid agent id")


class MalformedRequestError(InvalidRequestError):
    """
    Raised when a request body is not valid JSON or lacks a required
    string field.

    Example:
        {"content": "Day 1"}   ← expected
        {"content": 42}        ← raises this exception
    """

    def __init__(self, details=None):
        self.details = details or "Malformed request body."
        super().__init__(self.details)


class CredentialMissingError(LogbookError):
    """
    Raised when the summarization provider credential is not configured.

    This is a server configuration problem, not a client error.
    """

    status_code = 500

    def __init__(self, variable: str = "OPENAI_API_KEY"):
        self.variable = variable
        super().__init__(f"{variable} not set")


class UpstreamError(LogbookError):
    """
    Raised when the summarization provider call fails (transport or API
    error). The provider message is passed through for diagnostics.
    """

    status_code = 502

    def __init__(self, provider_message: str):
        self.provider_message = provider_message
        super().__init__(f"Summarization provider error: {provider_message}")


class LogStoreError(LogbookError):
    """
    Raised when reading or writing a log file fails for a reason other
    than the file not existing yet.
    """

    status_code = 500

    def __init__(self, path, details=None):
        self.path = path
        self.details = details or "Storage I/O failure."
        msg = f"Log storage error for {path}: {self.details}"
        super().__init__(msg)
