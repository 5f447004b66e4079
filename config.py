from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str = "sqlite:///./habit_wheel.db"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_MAX_FILE_SIZE: int = 10485760  # 10MB in bytes
    LOG_BACKUP_COUNT: int = 5
    LOG_COLORS: str = "true"
    LOG_TO_FILE: str = "true"

    # Environment
    ENVIRONMENT: str = "development"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
