from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "InkForge"
    debug: bool = False

    # Browser origins allowed to call the API (JSON list in the environment)
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    database_url: str = "postgresql+asyncpg://localhost:5432/inkforge"

    # Catalog lookups are issued in chunks of this many card ids
    catalog_batch_size: int = 500

    # Missing-card suggestions scan at most this many approved catalog rows
    suggestion_scan_limit: int = 500
    suggestion_limit: int = 40


settings = Settings()
