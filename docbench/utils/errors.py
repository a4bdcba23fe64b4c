"""Custom exception hierarchy for docbench.

All application exceptions inherit from :class:`WorkbenchError`, which
carries an optional ``provider_name`` so error handlers can tell which
model backend (e.g. "gemini", "openai", "anthropic") caused a failure.

The hierarchy follows the three failure classes a workbench operation can
hit, plus the usual lookup/configuration errors:

    WorkbenchError  (base -- catch-all for any docbench error)
    +-- LLMError                    (provider SDK call failed)
    +-- ModelGatewayError           (one gateway operation failed; user-facing)
    +-- InvalidResponseFormatError  (model returned non-JSON for a note)
    +-- InvalidNoteFormatError      (raw JSON edit could not be parsed)
    +-- InvalidInputError           (unknown model, out-of-range token budget)
    |   +-- MissingInputError       (precondition failed before any network call)
    +-- NotFoundError               (unknown workspace / document / note)
    +-- UnsupportedDocumentError    (upload is not text, image or PDF)
    +-- ConfigurationError          (startup / missing config)

Every error is terminal for the single operation that raised it.  Nothing
here is retried; the API middleware maps each class to an HTTP status via
:attr:`WorkbenchError.status_code`.
"""


class WorkbenchError(Exception):
    """Base exception for all docbench errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which model backend triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[gemini] quota exceeded``.
    """

    # HTTP status used by the error middleware when this error escapes a route.
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# (a) Transport / auth failures
# ---------------------------------------------------------------------------

class LLMError(WorkbenchError):
    """Raised by a provider adapter when the model API call fails."""

    status_code = 502

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ModelGatewayError(WorkbenchError):
    """Raised by the model gateway with the message shown to the user."""

    status_code = 502

    def __init__(
        self,
        message: str = "Model request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# (b) Malformed structured output
# ---------------------------------------------------------------------------

class InvalidResponseFormatError(ModelGatewayError):
    """Raised when the model's structured-note reply is not a JSON object."""

    def __init__(
        self,
        message: str = "The model returned an invalid format",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidNoteFormatError(WorkbenchError):
    """Raised when a raw JSON edit of a note cannot be parsed."""

    status_code = 422

    def __init__(
        self,
        message: str = "Invalid JSON format. Please correct it before updating.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# (c) Local precondition failures
# ---------------------------------------------------------------------------

class InvalidInputError(WorkbenchError):
    """Raised when a request names an unknown model or an out-of-range budget."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request parameters",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MissingInputError(InvalidInputError):
    """Raised before any network call when required input is absent."""

    def __init__(
        self,
        message: str = "Required input is missing",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(WorkbenchError):
    """Raised when a workspace, document or note does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str = "Resource not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnsupportedDocumentError(WorkbenchError):
    """Raised when an upload is neither text, image nor PDF."""

    status_code = 415

    def __init__(
        self,
        message: str = "Unsupported document type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ConfigurationError(WorkbenchError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
