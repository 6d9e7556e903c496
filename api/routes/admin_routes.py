"""
Admin Routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
import logging

from api.schemas.response_schemas import ValidationLogItem, ValidationLogsResponse
from api.dependencies import get_domain_service, require_admin
from config.constants import ValidationSource
from core.models import CurrentUser
from services.domain_service import DomainService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/validation-logs", response_model=ValidationLogsResponse)
async def list_validation_logs(
    domain: Optional[str] = Query(None, max_length=253),
    source: Optional[ValidationSource] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    admin: CurrentUser = Depends(require_admin),
    service: DomainService = Depends(get_domain_service)
) -> ValidationLogsResponse:
    """Recent resolver and buy-link anomalies, newest first"""
    try:
        entries = await service.audit_log.list_recent(domain=domain, source=source, limit=limit)
    except Exception as e:
        logger.error(f"Failed to load validation logs: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load validation logs"
        )

    logs = [
        ValidationLogItem(
            domain=entry.domain,
            source=entry.source.value,
            status=entry.status,
            message=entry.message,
            created_at=entry.created_at
        )
        for entry in entries
    ]
    return ValidationLogsResponse(logs=logs, count=len(logs))
