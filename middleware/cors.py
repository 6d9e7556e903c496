"""
CORS Middleware Configuration
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import logging

from config.settings import settings

logger = logging.getLogger(__name__)

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",  # Vite
    "http://localhost:8080"
]


def setup_cors(app: FastAPI) -> None:
    """Configure CORS middleware

    Args:
        app: FastAPI application instance
    """
    origins = get_allowed_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=3600  # Cache preflight requests for 1 hour
    )

    logger.info(f"✅ CORS configured for {len(origins)} origins")
    logger.debug(f"Allowed origins: {origins}")


def get_allowed_origins() -> List[str]:
    """Configured origins plus the frontend, and local dev servers in development"""
    origins = list(settings.allowed_origins)
    origins.append(settings.frontend_url)

    if settings.is_development():
        origins.extend(DEV_ORIGINS)

    # Remove duplicates keeping order
    return list(dict.fromkeys(origins))
