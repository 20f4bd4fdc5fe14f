"""Error taxonomy for the storefront client.

Validation failures (empty checkout, bad quantities) use
``protean.exceptions.ValidationError`` like the rest of the domain.
"""


class StorefrontError(Exception):
    """Base class for storefront client errors."""


class TransportError(StorefrontError):
    """The backend was unreachable or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class UnauthorizedError(TransportError):
    """The backend rejected the request's credentials (401/403)."""


class SubmissionError(StorefrontError):
    """An order could not be placed. The cart is left untouched."""


class InvalidCredentials(StorefrontError):
    """Admin login was rejected by the backend."""


class LoginRequired(StorefrontError):
    """An admin view or operation needs an authenticated session."""

    def __init__(self, redirect_to: str):
        super().__init__(f"Login required, redirect to {redirect_to}")
        self.redirect_to = redirect_to


class StorageCorrupted(StorefrontError):
    """A stored value could not be read back as text."""


class CartCorrupted(StorageCorrupted):
    """The persisted cart could not be decoded. Always recovered locally."""
