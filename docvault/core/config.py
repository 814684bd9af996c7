from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "DocVault"
    debug: bool = False

    # sqlite+aiosqlite for local runs, postgresql+asyncpg in Docker
    database_url: str = "sqlite+aiosqlite:///./docvault.db"
    create_tables: bool = True

    log_level: str = "INFO"
    log_dir: Optional[str] = None

    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
