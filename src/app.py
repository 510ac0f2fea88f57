"""Perfumery FastAPI application.

Multi-domain web server for the internal cultivation, processing and
warehousing APIs. Each request is wrapped in the correct domain context
based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the configuration overlay.
from cultivation.domain import cultivation
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from processing.domain import processing
from warehousing.domain import warehousing

from shared.api import register_error_handlers
from shared.utils.logging import add_context, clear_context

cultivation.init()
processing.init()
warehousing.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/plants": cultivation,
    "/processing": processing,
    "/perfumes": processing,
    "/warehouses": warehousing,
    "/dispatch": warehousing,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Perfumery Internal API",
    description="Cultivation, Processing & Warehousing domains",
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        add_context(domain=domain.name, path=request.url.path)
        try:
            with domain.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # No domain match: pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from cultivation.api import plant_router  # noqa: E402
from processing.api import perfume_router, processing_router  # noqa: E402
from warehousing.api import dispatch_router, warehouse_router  # noqa: E402

app.include_router(plant_router)
app.include_router(processing_router)
app.include_router(perfume_router)
app.include_router(warehouse_router)
app.include_router(dispatch_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "cultivation": {"name": cultivation.name},
                "processing": {"name": processing.name},
                "warehousing": {"name": warehousing.name},
            },
        }
    )
