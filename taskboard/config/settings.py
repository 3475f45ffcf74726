"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""

    # Task store (persistence server)
    TASK_API_URL: str = os.getenv("TASK_API_URL", "http://localhost:3002/api")
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "./tasks.db")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"
    WEB_PORT: int = int(os.getenv("WEB_PORT", "3002"))

    # Timezone used for "today" and for createdAt day grouping (hours from UTC)
    USER_TIMEZONE_OFFSET: int = int(os.getenv("USER_TIMEZONE_OFFSET", "0"))

    # Task defaults
    DEFAULT_TASK_DURATION_MINUTES: int = int(os.getenv("DEFAULT_TASK_DURATION_MINUTES", "120"))

    # Analytics
    CALENDAR_PREVIEW_LIMIT: int = int(os.getenv("CALENDAR_PREVIEW_LIMIT", "3"))
    ANALYTICS_CACHE_SIZE: int = int(os.getenv("ANALYTICS_CACHE_SIZE", "32"))

    @classmethod
    def validate(cls) -> bool:
        """Validate that numeric settings are within usable ranges"""
        problems = []

        if not cls.TASK_API_URL:
            problems.append("TASK_API_URL is empty")
        if not -12 <= cls.USER_TIMEZONE_OFFSET <= 14:
            problems.append(f"USER_TIMEZONE_OFFSET out of range: {cls.USER_TIMEZONE_OFFSET}")
        if cls.DEFAULT_TASK_DURATION_MINUTES <= 0:
            problems.append("DEFAULT_TASK_DURATION_MINUTES must be positive")
        if cls.CALENDAR_PREVIEW_LIMIT < 0:
            problems.append("CALENDAR_PREVIEW_LIMIT must not be negative")
        if cls.ANALYTICS_CACHE_SIZE <= 0:
            problems.append("ANALYTICS_CACHE_SIZE must be positive")

        if problems:
            raise ValueError(f"Invalid settings: {'; '.join(problems)}")

        return True


# Global settings instance
settings = Settings()
