"""Main FastAPI application for the agro weather service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agro_weather.api.endpoints import router as weather_router
from agro_weather.config import (
    DEBUG, FORECAST_DAYS, HOST, PORT, REFERENCE_TIMEZONE, SERVICE_NAME,
    SERVICE_VERSION, TOMORROW_IO_API_KEY
)
from agro_weather.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(f"Starting {SERVICE_NAME}: {FORECAST_DAYS}-day forecast in {REFERENCE_TIMEZONE}")
    if not TOMORROW_IO_API_KEY:
        logger.warning("TOMORROW_IO_API_KEY is not set, every response will carry placeholder weather")
    try:
        yield
    finally:
        logger.info(f"Shutting down {SERVICE_NAME}")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="Current conditions and calendar-aligned daily forecasts for the farm dashboard",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(weather_router)

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": SERVICE_NAME,
            "docs": "/docs",
            "redoc": "/redoc",
            "weather": "/weather",
            "health": "/weather/health",
            "info": "/weather/info"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "agro_weather.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info"
    )


if __name__ == "__main__":
    main()
