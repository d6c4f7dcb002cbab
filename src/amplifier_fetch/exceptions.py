"""Fetch-specific exceptions.

Per IMPLEMENTATION_PHILOSOPHY: Clear, actionable error messages.

Every error is terminal for the current resolve/fetch call. Nothing here is
retried by the library; retry policy belongs to the app.
"""


class FetchError(Exception):
    """Base exception for resolution and fetch operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, URIs, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidInputShapeError(FetchError):
    """Input matched a detector's shape but is structurally invalid for it."""

    def __init__(self, raw: str, hint: str):
        super().__init__(f"Invalid source '{raw}': {hint}", context={"raw": raw, "hint": hint})
        self.raw = raw
        self.hint = hint


class UriParseError(FetchError):
    """String could not be parsed as a URI."""


class GetterNotFoundError(FetchError):
    """No detector matched the input, or no getter is registered for the scheme."""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"No getter found for '{name}'", context={"name": name})
        self.name = name


class SourceNotFoundError(FetchError):
    """Local source path does not exist."""


class DestinationExistsError(FetchError):
    """Destination exists and is not a symlink from a previous fetch."""


class DestinationNotCreatedError(FetchError):
    """Parent directories of the destination could not be created."""


class BackendInitError(FetchError):
    """Getter setup (backend client construction) failed."""


class BackendOperationError(FetchError):
    """Remote call or response stream failed. The cause is chained."""


class FetchIOError(FetchError):
    """Generic filesystem failure while materializing the destination."""
