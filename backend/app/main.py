"""FastAPI application factory for the weather lookup backend."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import api_router
from .config import settings
from .services.openweather import clear_cache

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: report configuration, drop cached forecasts on exit."""
    if not settings.openweather_api_key:
        logger.warning("WXLOOKUP_OPENWEATHER_API_KEY is not set; lookups will fail")
    logger.info(
        "Upstream: %s (units=%s, timeout=%.1fs, cache=%ds)",
        settings.openweather_base_url, settings.units,
        settings.request_timeout, settings.cache_ttl_sec,
    )
    logger.info("Forecast time zone: %s", settings.forecast_timezone or "location offset")

    yield

    clear_cache()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Weather Lookup",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "weather-lookup"}

    return app


# Application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
