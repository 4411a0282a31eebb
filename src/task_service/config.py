from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "task-service"
    log_level: str = "INFO"

    # Shared secret for every /api route, sent as X-API-KEY
    api_key: str = "123456"
    log_file: str = "logs.txt"
    seed_tasks: bool = True
    dashboard_embed_api_key: bool = False

    otlp_endpoint: str = "http://otel-collector:4318"
    otel_sdk_disabled: bool = False
    scout_environment: str = "development"

    host: str = "0.0.0.0"
    port: int = 3000


@lru_cache
def get_settings() -> Settings:
    return Settings()
