"""Application Settings - Central Configuration"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # GLPI REST API
    glpi_api_url: str = ""
    glpi_app_token: str = ""
    glpi_user_token: str = ""
    glpi_timeout_seconds: float = 30.0
    glpi_ticket_range: str = "0-999"  # GLPI never returns more than this window
    glpi_release_session_per_request: bool = True

    # Storage - "memory" or "mongo"
    storage_backend: str = "memory"

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "opsboard_dev"

    # Logging
    logs_path: str = "./logs"
    log_level: str = "INFO"
    log_to_file: bool = True

    # CORS - set to "*" to allow all origins
    cors_origins: str = "*"

    # Environment
    environment: str = "development"
    debug: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string to list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def missing_glpi_settings(self) -> List[str]:
        """Names of the GLPI environment variables that are not set"""
        required = {
            "GLPI_API_URL": self.glpi_api_url,
            "GLPI_APP_TOKEN": self.glpi_app_token,
            "GLPI_USER_TOKEN": self.glpi_user_token,
        }
        return [name for name, value in required.items() if not value]

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
