# apps/api/turnus/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Turnus API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    TZ: str = "Europe/Oslo"

    # DB
    DATABASE_URL: str = "sqlite:///./turnus.db"
    # SQLite: bir yazma kilidi için en fazla bu kadar beklenir
    DB_LOCK_TIMEOUT_SEC: float = 30.0

    # CORS: "https://foo.com,https://bar.com"
    CORS_ALLOW_ORIGINS: str = ""

    # Identity: "mock" (X-User-Id header) or "jwt" (Bearer token, sub = user id)
    AUTH_MODE: str = "mock"
    JWT_SECRET: str = "CHANGE_ME"
    JWT_ALGO: str = "HS256"

    # Bulk shift processing
    BULK_MAX_ITEMS: int = 200
    BULK_BATCH_SIZE: int = 20
    BULK_ITEM_TIMEOUT_SEC: float = 30.0

    # Notifications
    SMS_TIMEOUT_SEC: float = 5.0
    NOTIFICATIONS_PAGE_SIZE: int = 50

    # Agenda window when no range is given
    AGENDA_DEFAULT_DAYS: int = 90

    # .env desteği ve fazla env'leri görmezden gel
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def cors_origins(self) -> list[str]:
        if self.CORS_ALLOW_ORIGINS.strip():
            return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

settings = Settings()
