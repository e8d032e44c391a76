from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "lexdocs"
    db_username: str = "lexdocs"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"
    html_parser: str = "lxml"

    enrichment_provider: str = "openai"
    enrichment_max_chars: int = 6000

    openai_api_key: str = ""
    openai_model_name: str = Field(
        default="",
        validation_alias=AliasChoices("openai_model_name", "model_primary"),
    )
    openai_base_url: str = ""
    openai_timeout_seconds: int = 30
    openai_temperature: float = 0.1
