"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    screensight_env: str = "development"
    screensight_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Model routing
    model_cheap: str = "claude-haiku-4-5-20251001"
    model_mid: str = "claude-sonnet-4-5-20250929"
    model_frontier: str = "claude-sonnet-4-5-20250929"
    vision_max_tokens: int = 4096

    # Request budget
    rate_limit_per_minute: int = 5
    rate_limit_per_hour: int = 50

    # Retry / backoff
    retry_attempts: int = 3
    retry_base_delay_ms: int = 1000

    # Image preprocessing
    image_max_bytes: int = 5 * 1024 * 1024
    image_max_width: int = 1920
    image_max_height: int = 1080
    image_quality: int = 90
    image_output_format: str = "image/jpeg"
    image_max_dimension: int = 4096
    url_fetch_timeout_s: float = 30.0

    # Element detection
    confidence_threshold: float = 0.5
    min_element_size: float = 5.0

    # Batch conversion
    batch_size: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
