from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # relational store (sqlite file by default, any SQLAlchemy URL works)
    database_url: str = "sqlite:///./data/lawoffice.db"
    sql_echo: bool = False

    # object storage root; every bucket is a sub-directory
    storage_dir: str = "data/storage"

    log_level: str = "INFO"

    # identity is resolved by the fronting auth provider
    auth_user_header: str = "X-User-Id"
    auth_email_header: str = "X-User-Email"
    auth_cookie_name: str = "user_id"
    dev_user_id: Optional[str] = None

    page_cache_enabled: bool = True

    office_name: str = "مكتب المحاماة"


settings = Settings()
