"""
Core settings and environment variables for Resource Map.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Resource Map"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Storage backend: "memory" (default, resets on restart) or "firestore"
    STORE_BACKEND: str = "memory"
    SEED_SAMPLE_DATA: bool = True

    # Firebase/Firestore (only read when STORE_BACKEND=firestore)
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Sessions
    SESSION_COOKIE_NAME: str = "resource_map_session"
    SESSION_COOKIE_SECURE: bool = False  # set True behind HTTPS
    SESSION_TTL_MINUTES: int = 60 * 24

    # Bootstrap admin account, created on startup when missing
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "urban123"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
