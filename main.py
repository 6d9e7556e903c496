"""
FastAPI Main Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
import uvicorn
import logging
from typing import Dict

from config.settings import settings
from config.logging_config import setup_logging
from core.ai_manager import AIManager
from database.client import init_supabase, close_supabase
from middleware import setup_middleware
from api.routes import api_router
from services.domain_service import build_domain_service

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown
    """
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}")

    service = None
    try:
        await init_supabase()

        AIManager.initialize()
        logger.info("✅ AI Manager initialized")

        service = build_domain_service()
        app.state.domain_service = service
        logger.info("✅ Domain service ready")

        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}", exc_info=True)
        raise
    finally:
        logger.info("🛑 Shutting down...")
        if service is not None:
            await service.close()
        await close_supabase()
        await AIManager.cleanup()
        logger.info("✅ Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Domain discovery, availability reconciliation and FlipScore API",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None
)

# Setup middleware (CORS, request logging, error handlers)
setup_middleware(app)

# Include routers
app.include_router(api_router)


# Root endpoint
@app.get("/")
async def root() -> Dict:
    """Root endpoint"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "simulation_mode": settings.simulation_mode,
        "docs": "/docs" if settings.debug else "disabled"
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )
