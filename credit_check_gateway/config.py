"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External credit report provider
    report_provider_base: str = "https://servicio.infoexperto.com.ar"
    report_provider_api_key: str | None = None
    default_dni_sex: str = "M"

    # Identity token verification
    identity_verify_url: str = "http://localhost:8003/verify"

    # Browser clients
    cors_allow_origins: list[str] = ["*"]

    # Service
    service_name: str = "credit-check-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 15.0


settings = Settings()
