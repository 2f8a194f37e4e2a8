"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (title, version, lifespan)
  - Configure middleware (CORS, request context)
  - Mount the election router under the /v1 prefix
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: request id and logging context
  - interfaces.api.http.router: aspirant lifecycle, candidates, audit

Constraints:
  - CORS configurable via ALLOWED_ORIGINS (comma-separated)
  - The DB pool is only opened when DATABASE_URL is set

Notes:
  - Middleware order: RequestContext -> CORS -> routes
  - /healthz follows the Kubernetes health check convention
  - /metrics exposes Prometheus metrics
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool, ping
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the DB pool when a database is configured."""
    settings = get_settings()

    if settings.uses_database():
        await init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    logger.info(
        "Electoral API starting up",
        extra={
            "app_env": settings.app_env,
            "storage": "postgres" if settings.uses_database() else "in_memory",
            "audit_enabled": settings.audit_enabled,
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )

    try:
        yield
    finally:
        if settings.uses_database():
            await close_pool()
        logger.info("Electoral API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="COHSSA Electoral API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "aspirants", "description": "Aspirant lifecycle (admin only)"},
            {"name": "candidates", "description": "Public candidate list"},
            {"name": "eligibility", "description": "CGPA eligibility check"},
            {"name": "audit", "description": "Audit trail ingestion and listing"},
        ],
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(router, prefix="/v1")
    register_exception_handlers(app)

    @app.get("/healthz")
    async def healthz(request: Request):
        """
        Liveness plus storage status.

        Returns:
            ok: True if the configured store is reachable
            db: "connected", "disconnected" or "in_memory"
            request_id: correlation id for this request
        """
        if get_settings().uses_database():
            db_status = "connected" if await ping() else "disconnected"
        else:
            db_status = "in_memory"

        return {
            "ok": db_status != "disconnected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics")
    def metrics():
        """Prometheus text format metrics."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
