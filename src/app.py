"""Fundraising Raffle FastAPI application.

Storefront, checkout and admin console served over HTTP. Commands are
processed synchronously; each request runs inside the raffle domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV picks the domain.toml overlay (memory by default, PostgreSQL
# under "production").
from raffle.domain import raffle  # noqa: E402
from raffle.utils.logging import add_context, clear_context  # noqa: E402

raffle.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Fundraising Raffle API",
    description="Raffle storefront, checkout and admin console",
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
    """Push the raffle domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    with raffle.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from raffle.api import admin_router, cart_router, event_router, order_router, system_router  # noqa: E402
from raffle.api.errors import register_exception_handlers  # noqa: E402

app.include_router(system_router)
app.include_router(event_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(admin_router)

register_exception_handlers(app)
