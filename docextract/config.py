from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Document Text Extraction Service"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Uploads
    max_file_size_mb: int = 10

    # Extraction defaults (overridable per call via ExtractionOptions)
    extraction_fallback_strategies: bool = True
    extraction_max_retries: int = 3
    extraction_timeout_seconds: float | None = 30.0
    extraction_preserve_formatting: bool = False
    extraction_extract_metadata: bool = True

    # In-process worker pool
    extraction_workers: int = 4
    extraction_queue_size: int = 16

    # Celery
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/1"

    # Frontend
    frontend_url: str = "http://localhost:3000"


settings = Settings()
