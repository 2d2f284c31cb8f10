"""
Account Service — Health endpoint
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from nexus_accounts.api.deps import get_account_service
from nexus_accounts.core.config import get_settings
from nexus_accounts.core.errors import StorageError
from nexus_accounts.schemas.accounts import HealthResponse
from nexus_accounts.services.accounts import AccountService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(service: AccountService = Depends(get_account_service)):
    """
    Verifies the key-value store answers.
    Returns 200 if healthy, 503 otherwise.
    """
    settings = get_settings()
    deps: dict[str, str] = {}
    healthy = True

    try:
        service.kv.ping()
        deps[settings.STORAGE_BACKEND] = "ok"
    except StorageError as e:
        deps[settings.STORAGE_BACKEND] = f"error: {e.message[:100]}"
        healthy = False

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        dependencies=deps,
    )

    return JSONResponse(
        content=response.model_dump(),
        status_code=200 if healthy else 503,
    )
