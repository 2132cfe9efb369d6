"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (auth, catalog, transactions, users, admin, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration
- Database schema creation on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from tradedesk.core.config import settings
from tradedesk.infrastructure.trading.database import get_engine, init_schema
from tradedesk.interfaces.admin.router import router as admin_router
from tradedesk.interfaces.auth.router import router as auth_router
from tradedesk.interfaces.health import router as health_router
from tradedesk.interfaces.trading.router import (
    products_router,
    transactions_router,
    users_router,
)
from tradedesk.shared.errors.handlers import register_error_handlers
from tradedesk.shared.logging import configure_logging
from tradedesk.shared.security.headers import SecurityHeadersMiddleware
from tradedesk.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the schema exists before serving."""
    engine_factory = app.dependency_overrides.get(get_engine, get_engine)
    init_schema(engine_factory())
    logger.info("%s %s started", settings.project_name, settings.version)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(products_router, prefix=API_PREFIX)
    app.include_router(transactions_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(admin_router, prefix=API_PREFIX)

    return app


app = create_app()
