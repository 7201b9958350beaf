from functools import lru_cache

from pydantic_settings import BaseSettings

MIN_REVIEWS = 3
CHUNK_SIZE = 20
HARD_CAP_REVIEWS = 400
SUMMARY_MAX_CHARS = 12000
LANGUAGE_BATCH_LIMIT = 25


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    bedrock_region: str = "us-east-1"
    bedrock_model_id: str = "amazon.nova-pro-v1:0"
    table_name: str = "reviews"
    translate_target_lang: str = "en"
    places_file: str = ""
    translate_workers: int = 1
    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "case_sensitive": False,
    }

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
