from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    service_title: str = "Content Credibility Service"
    service_version: str = "1.0.0"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    trusted_domains: list[str] = Field(default_factory=list)
    suspicious_domains: list[str] = Field(default_factory=list)

    random_seed: int | None = None
    single_flight: bool = True
    max_text_length: int = 10000
    max_image_bytes: int = 10 * 1024 * 1024

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CREDCHECK_",
        "case_sensitive": False,
    }


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
