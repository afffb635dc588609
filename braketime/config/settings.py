# braketime/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Literal


class Settings(BaseSettings):
    # App Info
    app_name: str = "Brake Time Admin API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Hosted backend (PostgREST / Supabase)
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    backend_timeout: float = 30.0

    # Where a store's manager lives: on the store row or in market_manager_stores
    store_manager_mode: Literal["column", "assignment"] = "column"

    # Notifications
    toast_duration_ms: int = 3000

    # Security
    secret_key: str = "change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080

    # Server
    host: str = "0.0.0.0"
    port: int = 10000

    # CORS
    cors_origins: List[str] = ["*"]

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST endpoint"""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
