from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""
    SUPABASE_JWT_AUDIENCE: str = "authenticated"
    JWT_ALGORITHM: str = "HS256"

    TASKS_TABLE: str = "tasks"
    # Per-user variant: tasks carry user_id and every task route needs a token.
    OWNERSHIP_ENABLED: bool = True

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ".local/dailytasks"
    LOG_TO_FILE: bool = True
    API_PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
