"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class FetcherSettings(BaseSettings):
    """Fetcher configuration."""

    user_agent: str = "pagefetch/0.1"
    max_redirects: int = 5
    accept_gzip: bool = True
    connect_timeout: float | None = None

    model_config = {"env_prefix": "PAGEFETCH_"}


settings = FetcherSettings()
