"""GetEmpStatus API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EmpStatusError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and cache initialized on startup via lifespan context manager
    - Cache connection failure never prevents startup (degraded mode)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import cache_admin, employee_status, health
from app.config import get_settings
from app.infrastructure.cache import init_cache
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    cache = init_cache(settings.cache_ttl_seconds)
    await cache.connect(
        settings.redis_url,
        connect_timeout_seconds=settings.redis_connect_timeout_seconds,
        socket_timeout_seconds=settings.redis_socket_timeout_seconds,
    )
    if not cache.is_available():
        logger.warning("Cache not available, running in degraded mode")
    logger.info("GetEmpStatus API started")
    yield
    logger.info("GetEmpStatus API shutting down")
    await cache.disconnect()
    await db.dispose()


app = FastAPI(
    title="GetEmpStatus API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.root_router)
app.include_router(health.router)
app.include_router(employee_status.router)
app.include_router(cache_admin.router)

register_error_handlers(app)
