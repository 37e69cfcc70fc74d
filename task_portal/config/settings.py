# task_portal/config/settings.py
# Runtime configuration for the task portal, read from the environment

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings resolved from environment variables"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./task_portal.db")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "prefer")

    # Session cookie / token signing
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    SESSION_EXPIRE_MINUTES: int = int(os.getenv("SESSION_EXPIRE_MINUTES", 8 * 60))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", 12))

    # Bootstrap admin, created when no admin exists
    DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")

    # Employee identifiers
    EMPLOYEE_ID_PREFIX: str = os.getenv("EMPLOYEE_ID_PREFIX", "EMP")
    EMPLOYEE_ID_WIDTH: int = int(os.getenv("EMPLOYEE_ID_WIDTH", 3))
    EMPLOYEE_ID_MAX_ATTEMPTS: int = int(os.getenv("EMPLOYEE_ID_MAX_ATTEMPTS", 5))

    # HTTP
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server launcher
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 3000))
    RELOAD: bool = os.getenv("RELOAD", "false").lower() == "true"

    @property
    def cookie_secure(self) -> bool:
        """Only send the session cookie over HTTPS in production"""
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.lower().startswith("sqlite")


settings = Settings()
