"""
Application configuration from environment variables.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class AppConfig(BaseSettings):
    pokefetch_base_url: str = "https://pokeapi.co/api/v2"
    # Timeout of the shared HTTP client; fetch_pokemon itself sets none
    pokefetch_http_timeout: float = 30.0
    pokefetch_cache_max_entries: int = 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()
