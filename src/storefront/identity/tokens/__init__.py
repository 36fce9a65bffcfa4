"""Token verifier factory.

Provides get_token_verifier() / set_token_verifier() to swap implementations:
- InMemoryTokenVerifier for development and testing
- an external identity provider adapter in production
"""

from storefront.identity.tokens.memory_adapter import InMemoryTokenVerifier
from storefront.identity.tokens.port import ADMIN_ROLE, USER_ROLE, Principal, TokenVerifier

_current_verifier: TokenVerifier | None = None


def get_token_verifier() -> TokenVerifier:
    """Return the current token verifier. Defaults to InMemoryTokenVerifier."""
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = InMemoryTokenVerifier()
    return _current_verifier


def set_token_verifier(verifier: TokenVerifier) -> None:
    """Override the active token verifier (useful for tests)."""
    global _current_verifier
    _current_verifier = verifier


def reset_token_verifier() -> None:
    """Reset to default verifier."""
    global _current_verifier
    _current_verifier = None


__all__ = [
    "ADMIN_ROLE",
    "USER_ROLE",
    "Principal",
    "TokenVerifier",
    "get_token_verifier",
    "reset_token_verifier",
    "set_token_verifier",
]
