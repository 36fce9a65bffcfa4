"""Token verifier port (abstract interface).

Defines how a bearer token is turned into the caller's identity. Credentials
and token formats belong to whichever identity provider is plugged in; the
rest of the storefront only ever sees a ``Principal``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

USER_ROLE = "USER"
ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of an operation."""

    user_id: str
    roles: frozenset[str] = field(default_factory=lambda: frozenset({USER_ROLE}))

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    def owns(self, user_id: str) -> bool:
        return str(self.user_id) == str(user_id)


class TokenVerifier(ABC):
    """Abstract bearer token verifier."""

    @abstractmethod
    def verify(self, token: str) -> Principal | None:
        """Resolve a token to its principal, or ``None`` if it is unknown."""
        ...

    @abstractmethod
    def issue(self, principal: Principal) -> str:
        """Hand out a token that will later verify to ``principal``."""
        ...

    @abstractmethod
    def revoke(self, token: str) -> None:
        """Forget a token. Unknown tokens are ignored."""
        ...
