"""
Configuration settings for the Matrimony client API.
Follows Single Responsibility Principle - only handles configuration.
"""
import logging
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App settings
    APP_NAME: str = "Matrimony Client API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Storage settings
    BASE_DIR: Path = Path(__file__).parent.parent
    SESSION_DIR: Path = BASE_DIR / "matrimony" / "db"

    # Remote backend settings
    API_BASE_URL: str = "https://nadarmahamai.com/api"
    UPLOAD_HOST: str = "nadarmahamai.com"
    HTTP_TIMEOUT: float = 30.0

    # Retry settings for transient network failures
    MAX_RETRIES: int = 2
    RETRY_BASE_DELAY: float = 0.5
    RETRY_MAX_DELAY: float = 5.0

    # Search settings
    SEARCH_RESULT_LIMIT: int = 50
    QUICK_SEARCH_AGE_TO: int = 60
    MIN_AGE: int = 18
    MAX_AGE: int = 90

    # Dashboard settings
    DEFAULT_VIEWS_LIMIT: int = 50

    class Config:
        env_file = Path(__file__).parent.parent / ".env"
        extra = "allow"

    @property
    def endpoints(self) -> dict:
        """Fixed backend endpoint URLs."""
        base = self.API_BASE_URL.rstrip("/")
        return {
            "login": f"{base}/login.php",
            "search_profiles": f"{base}/search_profiles.php",
            "get_profile": f"{base}/profile.php",
            "selected_profiles": f"{base}/selected-profiles.php",
            "dashboard_stats": f"{base}/dashboard-stats.php",
        }

    def ensure_directories(self):
        """Create necessary directories if they don't exist."""
        self.SESSION_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
