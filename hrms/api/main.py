"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, security headers, request context, CORS)
  - Mount every endpoint family under the /api prefix
  - Expose test, health, db-test and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - auth_routes / routers.*: HRMS endpoints

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Unknown routes answer 404 {"message": "Route not found"}

Notes:
  - Middleware order matters: RequestContext → SecurityHeaders → BodyLimit → routes
  - /metrics exposes Prometheus metrics

Production Readiness:
  - Env validation enforced at startup (via lifespan, not import time)
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from functools import partial

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_user_repository, uses_in_memory_storage
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import Envelope, render_error_body
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import check_connection, close_pool, init_pool
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .routers.attendance import router as attendance_router
from .routers.dashboard import router as dashboard_router
from .routers.employees import router as employees_router
from .routers.leaves import router as leaves_router
from .routers.performance import router as performance_router
from .routers.reports import router as reports_router

_STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if settings.is_production():
        settings.validate_security_requirements()

    # R: Los adapters in-memory (APP_ENV=test) no usan el pool.
    if not uses_in_memory_storage():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout_seconds=settings.db_pool_timeout_seconds,
            max_idle_seconds=settings.db_pool_max_idle_seconds,
            statement_timeout_ms=settings.db_statement_timeout_ms,
            slow_query_seconds=settings.db_slow_query_seconds,
            healthcheck_on_acquire=settings.db_healthcheck_on_acquire,
        )

    try:
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=partial(hash_password, admin=True),
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "HRMS API starting up",
            extra={
                "app_env": settings.app_env,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        close_pool()
        logger.info("HRMS API shutting down")


app = FastAPI(
    title="HRMS API",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration, login and profile (JWT)"},
        {"name": "attendance", "description": "Daily check-in / check-out"},
        {"name": "employees", "description": "Employee records and departments"},
        {"name": "leaves", "description": "Leave requests and approval"},
        {"name": "performance", "description": "Performance reviews"},
        {"name": "reports", "description": "Aggregate reports (admin/manager)"},
        {"name": "dashboard", "description": "Dashboard cards and activity feed"},
    ],
)

# R: Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
# 3. SecurityHeadersMiddleware
# 4. BodyLimitMiddleware - rejects oversized bodies
app.add_middleware(BodyLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)

_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.get_allowed_origins_list(),
    allow_credentials=_settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)

# R: Todas las familias de endpoints cuelgan de /api
api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(attendance_router)
api_router.include_router(employees_router)
api_router.include_router(leaves_router)
api_router.include_router(performance_router)
api_router.include_router(reports_router)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@api_router.get("/test", tags=["service"])
def service_test():
    return {
        "message": "HRMS Backend is running!",
        "timestamp": _now_iso(),
        "status": "success",
    }


@api_router.get("/health", tags=["service"])
def health(request: Request):
    """
    R: Liveness + estado de la base.

    Returns:
        status: siempre "healthy" si el proceso responde
        database: "connected" o "disconnected"
        uptime: segundos desde el arranque del proceso
    """
    return {
        "status": "healthy",
        "database": "connected" if check_connection() else "disconnected",
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "timestamp": _now_iso(),
        "request_id": getattr(request.state, "request_id", None),
    }


@api_router.get("/db-test", tags=["service"])
def db_test():
    if check_connection():
        return {"message": "Database connection successful!", "status": "success"}
    return JSONResponse(
        status_code=500,
        content=render_error_body("Database connection failed!", Envelope.STATUS),
    )


app.include_router(api_router)

register_exception_handlers(app)


# R: Prometheus metrics endpoint
@app.get("/metrics", include_in_schema=False)
def metrics():
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
