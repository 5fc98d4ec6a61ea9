"""Configuration settings for the agro weather service."""

import os
from typing import Final, Optional
from dotenv import load_dotenv

load_dotenv()

# Upstream API configuration
TOMORROW_IO_API_BASE_URL: Final[str] = os.getenv(
    "TOMORROW_IO_API_BASE_URL", "https://api.tomorrow.io/v4/timelines"
)
TOMORROW_IO_API_KEY: Optional[str] = os.getenv("TOMORROW_IO_API_KEY") or None
UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

# Issue "current" and "1d" as two concurrent requests instead of one combined query
SPLIT_UPSTREAM_REQUESTS: bool = os.getenv("SPLIT_UPSTREAM_REQUESTS", "false").lower() == "true"

# Forecast shape
FORECAST_DAYS: int = int(os.getenv("FORECAST_DAYS", "5"))
REFERENCE_TIMEZONE: str = os.getenv("REFERENCE_TIMEZONE", "UTC")

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

SERVICE_NAME: Final[str] = "Agro Weather Service"
SERVICE_VERSION: Final[str] = "0.1.0"
