"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from cardsearch.api import api_router, health_router
from cardsearch.core.config import settings
from cardsearch.core.exceptions import ConfigurationError
from cardsearch.core.logging import setup_logging
from cardsearch.middleware import RequestContextMiddleware
from cardsearch.repositories.cache_repo import connect_cache
from cardsearch.services.search_index import AlgoliaSearchClient

# Setup logging
setup_logging()
logger = structlog.get_logger()

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the search client and the optional cache once per process.
    """
    if not settings.algolia_configured:
        logger.error(
            "Missing Algolia configuration",
            hint="Set ALGOLIA_APP_ID and ALGOLIA_SEARCH_API_KEY",
        )
        raise ConfigurationError("Missing Algolia configuration")

    logger.info(
        "Starting Smart Pills API",
        version="1.0.0",
        debug=settings.api_debug,
        index=settings.algolia_index_name,
    )

    app.state.search_client = AlgoliaSearchClient()
    app.state.cache = await connect_cache(settings.redis_url)

    logger.info(
        "Redis cache status",
        enabled=app.state.cache is not None,
    )

    yield

    # Shutdown
    logger.info("Shutting down Smart Pills API")
    await app.state.search_client.close()
    if app.state.cache is not None:
        await app.state.cache.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Smart filter suggestions for card marketplace search",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.include_router(health_router, tags=["Health"])
# Include API routes with /api prefix
app.include_router(api_router, prefix="/api")


# Middleware for request logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug("Request")
    response = await call_next(request)
    logger.debug("Response", status=response.status_code)
    return response


# Added last so it runs first and request logs carry the bound context
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cardsearch.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
