"""
Account Service — Configuration
All settings are read from environment variables (or .env file).
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "account-service"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ── Storage ───────────────────────────────────────────────
    STORAGE_BACKEND: str = "redis"  # "redis" or "memory"
    KEY_PREFIX: str = ""
    CHANGE_CHANNEL: str = "storage-changes"

    # ── Redis ─────────────────────────────────────────────────
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""

    @property
    def redis_url(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ── Accounts ──────────────────────────────────────────────
    SEED_DEFAULT_SUPER_ADMIN: bool = True
    DEFAULT_SUPER_ADMIN_EMAIL: str = "superadmin@progress.com"
    DEFAULT_SUPER_ADMIN_NAME: str = "Super Admin"
    NOTIFICATION_RETENTION_DAYS: int = 30

    # ── SSE ───────────────────────────────────────────────────
    SSE_KEEPALIVE_INTERVAL_SECONDS: int = 15
    SSE_RETRY_MILLISECONDS: int = 3000

    # ── Observability ─────────────────────────────────────────
    METRICS_ENABLED: bool = True
    HEALTH_CHECK_TIMEOUT: float = 5.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()
