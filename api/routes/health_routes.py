"""
Health Check Routes
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
import logging
import time
from datetime import datetime

from api.schemas.response_schemas import HealthCheckResponse, HealthStatus
from api.dependencies import get_domain_service
from database.client import get_supabase
from core.ai_manager import AIManager
from config.settings import settings
from services.domain_service import DomainService

logger = logging.getLogger(__name__)
router = APIRouter()

# Track startup time
START_TIME = time.time()


@router.get("/", response_model=HealthCheckResponse)
async def health_check(
    service: DomainService = Depends(get_domain_service)
) -> HealthCheckResponse:
    """Component health; never fails the probe itself"""
    services = [
        await check_database(),
        check_authorities(service),
        check_ai_services()
    ]

    overall_status = "healthy"
    if any(s.status == "unhealthy" for s in services):
        overall_status = "unhealthy"
    elif any(s.status == "degraded" for s in services):
        overall_status = "degraded"

    return HealthCheckResponse(
        success=True,
        status=overall_status,
        version=settings.app_version,
        environment=settings.app_env,
        services=services,
        uptime_seconds=time.time() - START_TIME
    )


@router.get("/live")
async def liveness_probe() -> Dict[str, Any]:
    """Returns 200 if the process is alive"""
    return {
        "status": "alive",
        "timestamp": datetime.now().isoformat()
    }


@router.get("/ready")
async def readiness_probe() -> Dict[str, Any]:
    """Ready when the ledger store answers"""
    database = await check_database()
    ready = database.status != "unhealthy"

    return {
        "status": "ready" if ready else "not_ready",
        "database": database.status,
        "timestamp": datetime.now().isoformat()
    }


async def check_database() -> HealthStatus:
    """Check ledger store health"""
    if not settings.has_supabase():
        return HealthStatus(
            service="database",
            status="degraded",
            details={"backend": "in_memory", "persistent": False}
        )

    start = time.time()
    try:
        get_supabase().table('user_credits').select("user_id").limit(1).execute()
        return HealthStatus(
            service="database",
            status="healthy",
            latency_ms=(time.time() - start) * 1000,
            details={"backend": "supabase", "connected": True}
        )
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return HealthStatus(
            service="database",
            status="unhealthy",
            details={"backend": "supabase", "error": str(e)}
        )


def check_authorities(service: DomainService) -> HealthStatus:
    """Report which availability authorities are wired"""
    primary = service.resolver.primary
    secondary = service.resolver.secondary

    if settings.simulation_mode:
        status = "degraded"
    elif not settings.has_primary_api():
        status = "unhealthy"
    else:
        status = "healthy"

    return HealthStatus(
        service="availability",
        status=status,
        details={
            "primary": primary.name,
            "secondary": secondary.name,
            "simulation_mode": settings.simulation_mode
        }
    )


def check_ai_services() -> HealthStatus:
    """AI suggestions are optional: missing config only degrades"""
    stats = AIManager.get_instance().get_stats()
    return HealthStatus(
        service="ai_suggestions",
        status="healthy" if stats["configured"] else "degraded",
        details=stats
    )
