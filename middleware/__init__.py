"""
Middleware Package
"""
from fastapi import FastAPI
import logging
from middleware.cors import setup_cors
from middleware.logging_middleware import LoggingMiddleware
from middleware.error_handler import register_exception_handlers
from config.settings import settings

logger = logging.getLogger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """
    Configure all middleware for the application

    Args:
        app: FastAPI application instance
    """
    logger.info("Setting up middleware...")

    # 1. Request/Response logging
    if settings.enable_request_logging:
        app.add_middleware(LoggingMiddleware)
        logger.info("✅ Request logging middleware enabled")

    # 2. CORS (added last so it wraps everything, including preflight)
    setup_cors(app)

    # 3. Exception handlers (not middleware, but related)
    register_exception_handlers(app)

    logger.info("✅ All middleware configured")


__all__ = [
    "setup_middleware",
    "setup_cors",
    "LoggingMiddleware",
    "register_exception_handlers"
]
