"""FastAPI dependencies that resolve the caller from the bearer token."""

from fastapi import Depends, Header

from storefront.exceptions import AccessDeniedError, AuthenticationError
from storefront.identity.tokens import Principal, get_token_verifier

_BEARER = "bearer"


def bearer_token(authorization: str = Header(default="")) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != _BEARER or not token.strip():
        raise AuthenticationError({"authorization": ["Bearer token required"]})
    return token.strip()


def current_principal(token: str = Depends(bearer_token)) -> Principal:
    principal = get_token_verifier().verify(token)
    if principal is None:
        raise AuthenticationError({"authorization": ["Invalid or expired token"]})
    return principal


def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise AccessDeniedError({"principal": ["Administrator role required"]})
    return principal
