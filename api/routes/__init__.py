"""
API Routes Package
"""
from fastapi import APIRouter

# Import all routers
from api.routes.domain_routes import router as domain_router
from api.routes.credit_routes import router as credit_router
from api.routes.admin_routes import router as admin_router
from api.routes.health_routes import router as health_router

# Create main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(
    domain_router,
    prefix="/domains",
    tags=["Domains"]
)

api_router.include_router(
    credit_router,
    prefix="/credits",
    tags=["Credits"]
)

api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["Admin"]
)

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"]
)

__all__ = [
    "api_router",
    "domain_router",
    "credit_router",
    "admin_router",
    "health_router"
]
