"""
Search History Repository
"""
from typing import List
import logging

from core.models import SearchHistoryEntry
from database.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SearchHistoryRepository(BaseRepository):
    """Repository for user search history"""

    def __init__(self, db=None):
        super().__init__("search_history", db)

    async def record(
        self,
        user_id: str,
        keyword: str,
        operation: str,
        result_count: int,
        available_count: int = 0
    ) -> None:
        entry = SearchHistoryEntry(
            user_id=user_id,
            keyword=keyword,
            operation=operation,
            result_count=result_count,
            available_count=available_count
        )
        await self.create(entry.to_row())

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[SearchHistoryEntry]:
        rows = await self.get_all(filters={"user_id": user_id}, limit=limit, order_by="-created_at")
        return [
            SearchHistoryEntry(
                user_id=row["user_id"],
                keyword=row["keyword"],
                operation=row["operation"],
                result_count=row.get("result_count", 0),
                available_count=row.get("available_count", 0),
                created_at=self.parse_timestamp(row["created_at"])
            )
            for row in rows
        ]
