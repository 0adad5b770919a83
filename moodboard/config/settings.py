# moodboard/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # API
    PROJECT_NAME: str = "Moodboard"

    # CORS
    ALLOWED_HOSTS: List[str] = ["*"]

    # Storage (None = in-memory store)
    STORE_PATH: Optional[str] = None

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 3001
    MAX_WORKERS: int = 4

    # Images
    IMAGE_CACHE_CONTROL: str = "public, max-age=31536000, immutable"

    # Env
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
