"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lerndeutsch.config import get_settings
from lerndeutsch.logging_setup import configure_logging
from lerndeutsch.routers import extraction
from lerndeutsch.schemas.common import HealthStatus

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.gemini_api_key:
        logger.warning("startup.gemini_api_key_missing extraction requests will fail until GEMINI_API_KEY is set")
    yield


settings = get_settings()
app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(extraction.router, tags=["extraction"])


@app.get("/health", response_model=HealthStatus)
def health() -> HealthStatus:
    """Simple health check endpoint."""

    return HealthStatus(gemini_configured=bool(get_settings().gemini_api_key))
