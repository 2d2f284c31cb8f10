"""
Account Service — dependency wiring for the HTTP adapter
"""
from functools import lru_cache

from fastapi.responses import JSONResponse

from nexus_accounts.core.config import Settings, get_settings
from nexus_accounts.core.redis_client import get_redis
from nexus_accounts.db.kv import InMemoryKeyValueStore, KeyValueStore, RedisChangeSignal, RedisKeyValueStore
from nexus_accounts.schemas.accounts import OperationResult
from nexus_accounts.services.accounts import AccountService

# Error code → HTTP status for failed OperationResults.
ERROR_STATUS: dict[str, int] = {
    "validation": 422,
    "not_found": 404,
    "invalid_transition": 409,
    "auth": 401,
    "permission": 403,
    "storage": 503,
}


def build_kv_store(settings: Settings) -> KeyValueStore:
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryKeyValueStore()
    if settings.STORAGE_BACKEND == "redis":
        client = get_redis()
        return RedisKeyValueStore(
            client,
            signal=RedisChangeSignal(client, settings.CHANGE_CHANNEL),
            prefix=settings.KEY_PREFIX,
        )
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'")


@lru_cache()
def get_account_service() -> AccountService:
    settings = get_settings()
    return AccountService(build_kv_store(settings), settings=settings)


def to_response(result: OperationResult, success_status: int = 200) -> JSONResponse:
    if result.success:
        status_code = success_status
    else:
        status_code = ERROR_STATUS.get(result.error.code, 400)
    return JSONResponse(content=result.to_json(), status_code=status_code)
