from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    CONTENT_DIR: str = "content"
    INCLUDE_FUTURE: bool = False
    LOAD_WORKERS: int = 0  # 0 lets the executor pick

    # Listings
    PAGE_SIZE: int = 8
    SUMMARY_WORDS: int = 70

    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    # Admin endpoints
    BLOG_API_KEY: str = ""

    # Build info
    VERSION: str = "v0.0.0"
    GIT_COMMIT: str = "MISSING GIT COMMIT"
    BUILD_TIME: str = "MISSING BUILD TIME"

    @property
    def content_root(self) -> Path:
        return Path(self.CONTENT_DIR).expanduser()

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

    @property
    def max_workers(self) -> int | None:
        return self.LOAD_WORKERS or None


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
