# safarsorted/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

# Shipped fallbacks for the admin login. Never use these outside local dev.
DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASS = "change-me"


class Settings(BaseSettings):
    APP_NAME: str = "SafarSorted API"
    APP_VERSION: str = "2.0"
    ENV: str = "dev"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Storage (single JSON document)
    DATA_FILE: str = "data/inquiries.json"

    # Admin (HTTP Basic)
    ADMIN_USER: str = DEFAULT_ADMIN_USER
    ADMIN_PASS: str = DEFAULT_ADMIN_PASS

    # Public form rate limiting, per client IP
    RATE_LIMIT_REQUESTS: int = 30
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0

    # Frontend origins (GitHub Pages + local live-server)
    CORS_ORIGINS: list[str] = Field(
        default=[
            "https://safarsorted.github.io",
            "http://localhost:5500",
            "http://127.0.0.1:5500",
        ]
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENV.strip().lower() in {"prod", "production"}


settings = Settings()
