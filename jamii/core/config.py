from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Jamii Clinic"
    API_BASE_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Client storage
    TOKEN_STORAGE_KEY: str = "authToken"
    CLINIC_STORAGE_KEY: str = "selectedClinicId"
    RESET_PASSWORD_STORAGE_KEY: str = "reset_initial_password"
    STORAGE_BACKEND: str = "memory"
    STORAGE_PATH: str = ".jamii_storage.json"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "jamii:"

    AVATAR_PLACEHOLDER_URL: str = "https://placehold.co/32x32.png"
    CHECK_TOKEN_EXPIRY: bool = True
    LOG_LEVEL: str = "INFO"

    # Routes the guard redirects to
    LOGIN_ROUTE: str = "/"
    HOME_ROUTE: str = "/dashboard"
    CHANGE_PASSWORD_ROUTE: str = "/change-password"
    NOT_FOUND_ROUTE: str = "/not-found"

    API_ROOT: Optional[str] = None

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.API_ROOT:
            self.API_ROOT = self.API_BASE_URL.rstrip("/")

settings = Settings()
