from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Critic"
    debug: bool = False
    log_level: str = "INFO"

    # Figma URL handling
    figma_host_marker: str = "figma.com"
    figma_base_url: str = "https://www.figma.com"
    figma_embed_url: str = "https://www.figma.com/embed"

    # Analysis
    analysis_delay_seconds: float = 3.0
    analysis_timeout_seconds: float | None = None
    max_sessions: int = 1000
    session_ttl_seconds: float = 3600.0

    # Redis / Celery
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/1"


settings = Settings()
