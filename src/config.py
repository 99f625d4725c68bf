"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str
    db_echo: bool = False

    # App
    log_level: str = "INFO"
    environment: str = "development"

    # Storefront
    currency: str = "USD"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()  # type: ignore[call-arg]
