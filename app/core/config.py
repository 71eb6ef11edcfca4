from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    APP_NAME: str = "Volunteer History Backend"
    APP_VERSION: str = "1.0.0"

    # Database
    # Defaults to an in-memory SQLite database; point at Postgres etc. for persistence
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return "sqlite://"

    # Logging
    LOG_LEVEL: str = "INFO"

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"

    # Rankings
    TOP_VOLUNTEERS_DEFAULT_LIMIT: int = 10
    TOP_VOLUNTEERS_MAX_LIMIT: int = 100

    class Config:
        env_file = ".env"
        extra = "ignore"  # Allow extra fields in .env file

settings = Settings()
