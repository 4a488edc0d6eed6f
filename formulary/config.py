from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    api_base_url: str = "https://api.example.com/v1/"
    cache_file: Path = Path("forms_cache.json")
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FORMULARY_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
