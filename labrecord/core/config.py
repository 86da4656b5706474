# labrecord/core/config.py
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    DATABASE_URL: str = "sqlite:///./labrecord.db"

    # Hosted code runner (Piston-compatible)
    EXECUTION_API_URL: str = "https://emkc.org/api/v2/piston/execute"
    EXECUTION_CONNECT_TIMEOUT: float = 10.0
    EXECUTION_READ_TIMEOUT: float = 30.0

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

# Created once per process
settings = Settings()
