from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from nepstay.api.v1.router import router as api_v1_router
from nepstay.config.settings import settings
from nepstay.core.error_handlers import register_exception_handlers
from nepstay.core.logging import get_logger, setup_logging
from nepstay.core.middleware import register_middlewares
from nepstay.core.rate_limiting import limiter
from nepstay.db.init_db import init_db
from nepstay.db.session import close_client, get_database
from nepstay.utils.datetime_utils import DateTimeHelper

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, rate limiting and exception handlers.
    - Includes the API router under ``settings.API_PREFIX`` (``/api``).
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Credentialed CORS needs explicit origins; the session lives in a cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    register_middlewares(app, include_security=True)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    def health_check() -> dict:
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": DateTimeHelper.to_iso(DateTimeHelper.utcnow()),
            "environment": settings.ENVIRONMENT,
        }

    @app.on_event("startup")
    def on_startup() -> None:
        if settings.ENVIRONMENT != "test":
            init_db(get_database())
        logger.info(
            "Application started",
            extra={"environment": settings.ENVIRONMENT, "api_prefix": settings.API_PREFIX},
        )

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        close_client()

    return app


app = create_app()
