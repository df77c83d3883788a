import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = "Visitor Management"
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_NAME: str = os.getenv("DB_NAME", "visitor_management")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(
        os.getenv("JWT_EXPIRE_MINUTES", 60 * 24 * 7))  # 7 days default

    # One-click approval links sent to staff
    APPROVAL_TOKEN_EXPIRE_DAYS: int = int(
        os.getenv("APPROVAL_TOKEN_EXPIRE_DAYS", 7))
    APPROVAL_TOKEN_SECRET: str | None = os.getenv("APPROVAL_TOKEN_SECRET")

    # Email Configuration
    EMAIL_ENABLED: bool = os.getenv("EMAIL_ENABLED", "True").lower() == "true"
    SMTP_HOST: str | None = os.getenv("SMTP_HOST")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", 587))
    SMTP_USERNAME: str | None = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD: str | None = os.getenv("SMTP_PASSWORD")
    SMTP_USE_SSL: bool = os.getenv("SMTP_USE_SSL", "False").lower() == "true"
    SMTP_TIMEOUT_SECONDS: int = int(os.getenv("SMTP_TIMEOUT_SECONDS", 30))
    EMAIL_SENDER: str = os.getenv("EMAIL_SENDER", "noreply@company.com")
    EMAIL_SENDER_NAME: str = os.getenv(
        "EMAIL_SENDER_NAME", "Visitor Management System")

    SEED_ON_STARTUP: bool = os.getenv(
        "SEED_ON_STARTUP", "False").lower() == "true"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def approval_secret(self) -> str:
        return self.APPROVAL_TOKEN_SECRET or self.JWT_SECRET


settings = Settings()

DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)
