from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    currency: str = Field("$", alias="KKB_CURRENCY")
    share_url: str = Field("http://localhost:5173/", alias="KKB_SHARE_URL")
    share_param: str = Field("data", alias="KKB_SHARE_PARAM")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
