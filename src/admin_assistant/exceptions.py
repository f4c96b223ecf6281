"""Domain exceptions for the admin assistant.

These map to consistent HTTP responses when handled by the global exception handler.
Inside a conversation they are caught at the interpreter and agent boundaries and
turned into in-band error messages.
"""


class AssistantError(Exception):
    """Base exception for admin assistant domain errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail or message


class ValidationError(AssistantError):
    """Raised when input to a flow does not match its declared schema.

    Always raised before any call to the completion provider.
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=400, detail=detail or message)


class CompletionError(AssistantError):
    """Raised when a generation call returned no usable structured output."""

    def __init__(self, message: str, detail: str | None = None, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, detail=detail or message)


class ProviderUnavailable(CompletionError):
    """Raised when the completion provider could not be reached or rejected the call."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, detail=detail, status_code=503)


class GenerationFailed(CompletionError):
    """Raised by a prompt flow when the provider produced nothing usable."""


class ToolExecutionError(AssistantError):
    """Raised when a catalog tool could not fetch data from the store."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=502, detail=detail or message)


class CatalogAPIError(AssistantError):
    """Raised when the Shopify Admin API call fails or returns GraphQL errors."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=502, detail=detail or message)


class ConfigurationError(AssistantError):
    """Raised on first catalog use when Shopify credentials are missing."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=500, detail=detail or message)


class SessionNotFoundError(AssistantError):
    """Raised when a conversation session id is unknown."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=404, detail=detail or message)
