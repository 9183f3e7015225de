"""Fat Cat storefront FastAPI application.

Every request runs inside the storefront domain context, so commands are
processed synchronously and handlers see ``current_domain``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay in domain.toml:
#   - "test"/unset → in-memory providers
#   - "production" → SQLite under data/
storefront.init()

logger = get_logger(__name__)

app = FastAPI(
    title="Fat Cat API",
    description="Storefront and back-office for the Fat Cat shop",
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
    """Push the storefront domain context and tag log records for the request."""
    request_id = request.headers.get("x-request-id") or uuid4().hex
    add_context(request_id=request_id, path=request.url.path, method=request.method)
    try:
        with storefront.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    response.headers["x-request-id"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    admin_router,
    auth_router,
    public_router,
    register_error_handlers,
)

app.include_router(public_router)
app.include_router(auth_router)
app.include_router(admin_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
