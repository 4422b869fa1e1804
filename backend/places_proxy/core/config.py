from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Google Places credential (required for /placesProxy)
    GOOGLE_MAPS_API_KEY: Optional[str] = None

    # Upstream nearby-search endpoint
    PLACES_API_URL: str = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

    # "production" hides internal error details from clients
    ENVIRONMENT: str = "production"

    LOGGER: int = 20
    LOG_TO_FILE: bool = True
    LOG_DIRECTORY: str = "logs"
    LOG_FILE: str = "app.log"

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

settings = Settings()

def get_settings() -> Settings:
    """
    Dependency returning the configuration for a single request.
    Re-reads the environment so a request never relies on a cached key.
    """
    return Settings()
