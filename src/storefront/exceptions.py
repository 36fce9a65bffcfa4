"""Storefront exceptions that Protean does not already provide.

Field-level problems use ``protean.exceptions.ValidationError`` and missing
entities use ``protean.exceptions.ObjectNotFoundError``. Both carry a
``messages`` dict; the classes below follow the same shape so the HTTP layer
can render every error the same way.
"""


class StorefrontError(Exception):
    """Base exception for storefront business errors."""

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)


class ConflictError(StorefrontError):
    """Raised when a request conflicts with current state (stock, empty cart, duplicate email)."""


class AccessDeniedError(StorefrontError):
    """Raised when an authenticated caller lacks the privilege for an operation."""


class AuthenticationError(StorefrontError):
    """Raised when a request carries no bearer token or an unknown one."""
