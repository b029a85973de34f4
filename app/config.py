from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Helena CRM settings
    HELENA_API_URL: str = "https://api.helena.run/core/v1/contact/filter"
    HELENA_API_TOKEN: str | None = None
    HELENA_REQUEST_TIMEOUT: float = 30.0

    # Web dashboard
    CORS_ALLOWED_ORIGINS: list[str] = ["*"]
    STATIC_DIR: str = "public"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def has_helena_token(self) -> bool:
        return bool(self.HELENA_API_TOKEN)

    def static_path(self) -> Path:
        """Resolve STATIC_DIR against the project root when it is relative."""
        path = Path(self.STATIC_DIR)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


settings = Settings()
