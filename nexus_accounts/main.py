"""
Account Service — FastAPI application entrypoint
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from nexus_accounts.api import accounts, auth, changes, health, notifications
from nexus_accounts.api.deps import get_account_service
from nexus_accounts.core.config import get_settings
from nexus_accounts.core.errors import ValidationError
from nexus_accounts.core.redis_client import close_redis
from nexus_accounts.core.results import describe_errors
from nexus_accounts.schemas.accounts import OperationResult

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: seed the default super admin and restore the session slot
    service = get_account_service()
    if settings.SEED_DEFAULT_SUPER_ADMIN:
        result = service.ensure_default_super_admin()
        if not result.success:
            logger.warning("Default super admin not seeded: %s", result.error.message)
    service.session.init()
    yield
    # Shutdown
    await close_redis()


app = FastAPI(
    title="Code Nexus Account Service",
    description="Account lifecycle, approval workflow and notifications for the progress tracker.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Prometheus Metrics ────────────────────────────────────────────────────────
if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(notifications.router)
app.include_router(changes.router)
app.include_router(health.router)


# Malformed request bodies get the same failure shape as every other operation.
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError(describe_errors(exc.errors()))
    logger.info("%s %s rejected: %s", request.method, request.url.path, error.message)
    return JSONResponse(content=OperationResult.fail(error).to_json(), status_code=422)


@app.get("/")
async def root():
    return {"service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}
