"""Custom exceptions for Topdeck.gg API service."""


class TopdeckAPIError(Exception):
    """Base exception for Topdeck API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TopdeckAuthError(TopdeckAPIError):
    """Authentication failed (401/403)."""

    pass


class TopdeckNotFoundError(TopdeckAPIError):
    """Resource not found (404)."""

    pass


class TopdeckRateLimitError(TopdeckAPIError):
    """Rate limit exceeded (429)."""

    pass


class TopdeckServerError(TopdeckAPIError):
    """Server-side error (5xx)."""

    pass
