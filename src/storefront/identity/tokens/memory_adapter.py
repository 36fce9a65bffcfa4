"""In-process token verifier for development and tests.

Tokens are random strings held in a dictionary, so they do not survive a
restart and are not shared between workers.
"""

import secrets

import structlog

from storefront.identity.tokens.port import Principal, TokenVerifier

logger = structlog.get_logger(__name__)


class InMemoryTokenVerifier(TokenVerifier):
    def __init__(self):
        self._principals: dict[str, Principal] = {}

    def verify(self, token: str) -> Principal | None:
        return self._principals.get(token)

    def issue(self, principal: Principal) -> str:
        token = secrets.token_urlsafe(32)
        self._principals[token] = principal
        logger.debug("Token issued", user_id=principal.user_id)
        return token

    def revoke(self, token: str) -> None:
        self._principals.pop(token, None)
