"""
Configuration settings cho Learning Platform API
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file từ thư mục root của project
# backend/academy/config.py -> backend/ -> project root
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    # Fallback: thử load từ thư mục backend/
    fallback_path = Path(__file__).parent.parent / ".env"
    if fallback_path.exists():
        load_dotenv(dotenv_path=fallback_path)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Learning Platform API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database - PostgreSQL
    # DATABASE_URL ghi đè toàn bộ các biến POSTGRES_*
    DATABASE_URL: Optional[str] = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "learning_platform"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""

    # JWT
    JWT_SECRET_KEY: str = "your-secret-key-change-in-production-0123456789"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "learning-platform"
    JWT_AUDIENCE: str = "learning-platform-clients"
    JWT_LIFETIME_MINUTES: int = Field(default=5, gt=0)
    REFRESH_TOKEN_LIFETIME_MINUTES: int = Field(default=60, gt=0)

    # Password hashing
    BCRYPT_ROUNDS: int = Field(default=13, ge=13, le=31)

    # Quiz
    QUIZ_PASS_PERCENTAGE: float = Field(default=70.0, ge=0, le=100)

    # AI (Gemini) - không có key thì tính năng sinh quiz/gợi ý bị tắt
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    @property
    def database_url(self) -> str:
        """Database connection URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache
def get_settings() -> Settings:
    """Settings được tạo một lần khi khởi động và dùng chung"""
    return Settings()
