from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8080, alias="APP_PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Local queue database
    database_url: str = Field(alias="DATABASE_URL")

    # Immich: asset database (read) and API (delete)
    immich_database_url: str = Field(alias="IMMICH_DATABASE_URL")
    immich_host: str = Field(alias="IMMICH_HOST")
    immich_token: str = Field(alias="IMMICH_TOKEN")
    immich_timeout_seconds: float = Field(default=30, alias="IMMICH_TIMEOUT_SECONDS")

    # Path rewrite: Immich upload root -> local video root
    immich_upload_path: str = Field(default="", alias="IMMICH_UPLOAD_PATH")
    video_path: str = Field(default="", alias="VIDEO_PATH")

    # Discovery
    cursor_file: str = Field(default="last_processed_time.json", alias="CURSOR_FILE")
    discovery_batch_size: int = Field(default=100, alias="DISCOVERY_BATCH_SIZE")
    excluded_extensions: str = Field(default=".mkv", alias="EXCLUDED_EXTENSIONS")
    poll_interval_seconds: int = Field(default=600, alias="POLL_INTERVAL_SECONDS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_structured: bool = Field(default=False, alias="LOG_STRUCTURED")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def excluded_extension_list(self) -> list[str]:
        return [e.strip().lower() for e in self.excluded_extensions.split(",") if e.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
