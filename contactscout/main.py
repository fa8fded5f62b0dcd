import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from contactscout.api.router import api_router, root_router
from contactscout.core.config import settings
from contactscout.core.database import close_mongo_connection, connect_to_mongo
from contactscout.core.error_handlers import (
    base_api_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from contactscout.core.exceptions import BaseAPIException
from contactscout.core.logging import setup_logging
from contactscout.core.security import ClientIPMiddleware, add_cors_headers
from contactscout.services.scrape_orchestrator import ScrapeOrchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_mongo()
    orchestrator = ScrapeOrchestrator()
    app.state.scrape_orchestrator = orchestrator

    warmup_task = None
    if settings.SCRAPER_WARMUP_ON_STARTUP:
        # The provider cold-starts; wake it without holding up startup
        warmup_task = asyncio.create_task(orchestrator.extraction_client.warm_up())

    logger = logging.getLogger(__name__)
    logger.info("Contact Scout API started")
    yield
    # Shutdown
    if warmup_task is not None and not warmup_task.done():
        warmup_task.cancel()
    await orchestrator.wait_for_pending()
    await orchestrator.extraction_client.aclose()
    await close_mongo_connection()
    logger.info("Contact Scout API shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Contact extraction orchestration API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

setup_logging()
logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response


app.add_middleware(ClientIPMiddleware)
app.add_middleware(TimingMiddleware)
# Pre-flight requests are answered here without reaching the routers
app.add_middleware(BaseHTTPMiddleware, dispatch=add_cors_headers)

app.include_router(root_router)
app.include_router(api_router, prefix=settings.API_PREFIX)

instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app, endpoint="/metrics")


@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint for deployment verification"""
    return {
        "status": "healthy",
        "service": "contact-scout",
        "version": "1.0.0",
        "timestamp": datetime.now(UTC).isoformat(),
    }


app.add_exception_handler(BaseAPIException, base_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)
