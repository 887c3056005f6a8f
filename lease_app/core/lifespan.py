import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .backend_client import BackendClient
from .breaker import breaker
from .settings import settings

logger = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")

    if getattr(app.state, "backend", None) is None:
        app.state.backend = BackendClient()
    logger.info("Backend client ready for %s", settings.BACKEND_API_URL)

    try:
        yield
    finally:
        try:
            await app.state.backend.close()
            logger.info("Backend client closed.")
        except Exception:
            logger.exception("Failed to close backend client")
        breaker.reset()
        app.state.backend = None
