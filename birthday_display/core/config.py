from typing import Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class Settings(BaseSettings):
    WINDOW_TITLE: str = "Birthday Display"
    IMAGE_WIDTH: int = 300
    IMAGE_MAX_BYTES: int = 10 * 1024 * 1024
    IMAGE_FETCH_CONCURRENCY: int = 10
    REFRESH_INTERVAL_SECONDS: int = 60
    POLL_INTERVAL_MS: int = 100
    SHOW_IMAGE_ERRORS: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    HTTP_POOL_SIZE: int = 50
    HTTP_POOL_SIZE_PER_HOST: int = 40
    HTTP_TTL_DNS_CACHE: int = 300
    HTTP_TIMEOUT_TOTAL: int = 30
    HTTP_TIMEOUT_CONNECT: int = 10
    HTTP_TIMEOUT_SOCK_CONNECT: int = 10
    HTTP_TIMEOUT_SOCK_READ: int = 30

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
