"""Configuration settings for the application."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "FinZen API"
    debug: bool = False
    log_level: str = "INFO"

    # Remote backend (Supabase project). Leave the URL empty to run against
    # the in-memory mock backend.
    backend: str = "supabase"
    supabase_url: str = ""
    supabase_anon_key: str = ""
    request_timeout: float = 10.0

    # Read limits
    transaction_page_size: int = 100
    tip_fetch_limit: int = 5
    tip_display_limit: int = 3
    top_category_limit: int = 5

    # Per-user dashboard states kept in memory (least recently used dropped first)
    max_cached_users: int = 1000

    @property
    def use_mock_backend(self) -> bool:
        return self.backend == "mock" or not self.supabase_url


settings = Settings()
