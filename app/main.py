"""
NPS dashboard backend: FastAPI app with Helena client lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.middleware import CORSMiddleware, RequestContextMiddleware
from app.routes import dashboard, health
from app.services.helena.client import HelenaContactsClient

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared Helena client on startup and close it on shutdown."""

    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    if not settings.has_helena_token():
        logger.warning("HELENA_API_TOKEN is not set; dashboard requests will fail")

    app.state.helena_client = HelenaContactsClient(
        api_token=settings.HELENA_API_TOKEN,
        base_url=settings.HELENA_API_URL,
        timeout=settings.HELENA_REQUEST_TIMEOUT,
    )

    yield

    logger.info("Application shutting down")
    try:
        await app.state.helena_client.close()
    except Exception as e:
        logger.error("Error closing Helena client", error=str(e))


app = FastAPI(
    title="NPS Dashboard",
    description="Helena NPS survey aggregation for the satisfaction dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# Last added runs first: request context wraps CORS
app.add_middleware(CORSMiddleware, allowed_origins=settings.CORS_ALLOWED_ORIGINS)
app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(dashboard.router)

# Dashboard assets; mounted last so API routes take precedence
static_path = settings.static_path()
if static_path.is_dir():
    app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
else:
    logger.info("Static directory not found, serving API only", static_dir=str(static_path))


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    logger.info("Server starting", port=settings.PORT)
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
