class ContentBackendError(Exception):
    """Raised when the content API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidCursorError(ValueError):
    """Raised when a pagination cursor does not point at the content API."""


class GenerationInProgress(Exception):
    """Raised when a page is requested while its first generation is running."""
