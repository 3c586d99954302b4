from datetime import tzinfo
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://habits:habits@db:5432/habits"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Bearer tokens
    SECRET_KEY: str = "changeme-secret-key"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Calendar days (tracking, history, streaks) are cut in this timezone.
    TIMEZONE: str = "UTC"
    HISTORY_WINDOW_DAYS: int = 7

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/hour"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def tzinfo(self) -> tzinfo:
        return ZoneInfo(self.TIMEZONE)


settings = Settings()
