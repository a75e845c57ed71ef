"""Storefront FastAPI application.

Processes commands synchronously per request. Payment settlement runs on
the simulator's worker pool and never holds up a response.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"        → in-memory stores, cheap password hashing
#   - "development" → sqlite
#   - "production"  → postgresql (DATABASE_URL)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from storefront.domain import storefront
from storefront.identity.bootstrap import ensure_default_admin
from storefront.payment.simulator import reset_simulator
from storefront.utils.logging import configure_logging

configure_logging()
storefront.init()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_default_admin(storefront)
    yield
    reset_simulator(wait=True)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Products, accounts, carts and orders with simulated payment settlement",
    lifespan=lifespan,
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
    """Push the storefront domain context for each request."""
    with storefront.domain_context():
        response = await call_next(request)
    return response


register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api.routes import (  # noqa: E402
    auth_router,
    cart_router,
    order_router,
    product_router,
    user_router,
)

for router in (auth_router, user_router, product_router, cart_router, order_router):
    app.include_router(router, prefix=storefront.API_BASE_PATH)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
