"""
Validation Log Repository (append-only audit trail)
"""
from typing import Optional, List
import logging

from config.constants import ValidationSource
from core.models import ValidationLogEntry
from database.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ValidationLogRepository(BaseRepository):
    """Repository for resolver and buy-link anomalies"""

    def __init__(self, db=None):
        super().__init__("validation_logs", db)

    async def append(self, entry: ValidationLogEntry) -> None:
        await self.create(entry.to_row())

    async def list_recent(
        self,
        domain: Optional[str] = None,
        source: Optional[ValidationSource] = None,
        limit: int = 100
    ) -> List[ValidationLogEntry]:
        """Newest entries first, optionally filtered"""
        filters = {}
        if domain:
            filters["domain"] = domain
        if source:
            filters["source"] = source.value

        rows = await self.get_all(filters=filters, limit=limit, order_by="-created_at")
        return [
            ValidationLogEntry(
                domain=row["domain"],
                source=ValidationSource(row["source"]),
                status=row["status"],
                message=row.get("message"),
                created_at=self.parse_timestamp(row["created_at"])
            )
            for row in rows
        ]
