"""Translation of domain errors into HTTP responses.

Every error body has the same shape: ``{"error": <kind>, "messages": {...}}``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from storefront.exceptions import AccessDeniedError, AuthenticationError, ConflictError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Exception class -> (HTTP status, error kind)
ERROR_STATUS = {
    ValidationError: (400, "validation_error"),
    AuthenticationError: (401, "unauthorized"),
    AccessDeniedError: (403, "access_denied"),
    ObjectNotFoundError: (404, "not_found"),
    ConflictError: (409, "conflict"),
    ExpectedVersionError: (409, "conflict"),
}


def error_response(status_code: int, error: str, exc: Exception) -> JSONResponse:
    messages = getattr(exc, "messages", None) or {"_entity": [str(exc)]}
    return JSONResponse(status_code=status_code, content={"error": error, "messages": messages})


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, (status_code, error) in ERROR_STATUS.items():

        async def handler(request: Request, exc: Exception, status_code=status_code, error=error):
            logger.info("Request rejected", status_code=status_code, error=error)
            return error_response(status_code, error, exc)

        app.add_exception_handler(exc_class, handler)
