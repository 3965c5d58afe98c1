"""
Application configuration
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings"""

    def __init__(self):
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8000"))

        cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000")
        self.CORS_ORIGINS: List[str] = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

        # Rendering service
        self.SCREENSHOTONE_API_KEY: Optional[str] = os.getenv("SCREENSHOTONE_API_KEY") or None
        self.SCREENSHOTONE_API_URL: str = os.getenv("SCREENSHOTONE_API_URL", "https://api.screenshotone.com/take")
        self.SCREENSHOT_TIMEOUT: float = float(os.getenv("SCREENSHOT_TIMEOUT", "60"))

        # Bot verification
        self.CF_TURNSTILE_SITE_KEY: str = os.getenv("CF_TURNSTILE_SITE_KEY", "")
        self.CF_TURNSTILE_SECRET_KEY: Optional[str] = os.getenv("CF_TURNSTILE_SECRET_KEY") or None
        self.TURNSTILE_VERIFY_URL: str = os.getenv(
            "TURNSTILE_VERIFY_URL", "https://challenges.cloudflare.com/turnstile/v0/siteverify"
        )


def get_settings() -> Settings:
    """Read settings fresh from the environment"""
    return Settings()


settings = Settings()
