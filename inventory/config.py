"""
Configuration management for the Inventory Service
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Inventory Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server (bind all interfaces)
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Database
    SQLITE_PATH: str = "./inventory.db"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.SQLITE_PATH}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
