"""Storefront FastAPI application.

Web server that processes commands synchronously via HTTP. Every request is
wrapped in the storefront domain context and tagged in the structured logs
with its method and path.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import storefront
from storefront.utils.errors import register_exception_handlers
from storefront.utils.logging import add_context, clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce backend: catalogue, accounts, cart and checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and bind request details for logging."""
    clear_context()
    add_context(
        request_id=request.headers.get("x-request-id", uuid.uuid4().hex),
        method=request.method,
        path=request.url.path,
    )
    with storefront.domain_context():
        response = await call_next(request)
    return response


# ValidationError 400, AuthenticationError 401, AccessDeniedError 403,
# ObjectNotFoundError 404, ConflictError and ExpectedVersionError 409
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.cart.api import cart_router  # noqa: E402
from storefront.catalogue.api import product_router  # noqa: E402
from storefront.identity.api import address_router, user_router  # noqa: E402
from storefront.order.api import order_router  # noqa: E402

app.include_router(user_router)
app.include_router(address_router)
app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
