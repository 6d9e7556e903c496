"""
Base Repository Pattern
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import logging
from pydantic import TypeAdapter
from supabase import Client

from database.client import get_supabase
from core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

_TIMESTAMP = TypeAdapter(datetime)


class BaseRepository:
    """Base repository with common database operations"""

    def __init__(self, table_name: str, db: Optional[Client] = None):
        """Initialize repository

        Args:
            table_name: Name of the database table
            db: Client override; defaults to the shared Supabase client
        """
        self.table_name = table_name
        self.db: Client = db if db is not None else get_supabase()

    @staticmethod
    def now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def parse_timestamp(value: Any) -> Optional[datetime]:
        """Parse a PostgREST timestamp (fractional seconds may have 1-6 digits)"""
        if value is None:
            return None
        return _TIMESTAMP.validate_python(value)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record

        Args:
            data: Record data

        Returns:
            Created record
        """
        try:
            if 'created_at' not in data:
                data['created_at'] = self.now()

            result = self.db.table(self.table_name).insert(data).execute()
        except Exception as e:
            logger.error(f"Create failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        if not result.data:
            raise DatabaseError(f"Failed to create {self.table_name} record")

        return result.data[0]

    async def get_one(self, column: str, value: Any) -> Optional[Dict[str, Any]]:
        """Get the first record where column == value"""
        try:
            result = self.db.table(self.table_name).select("*").eq(column, value).limit(1).execute()
        except Exception as e:
            logger.error(f"Get by {column} failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        if result.data:
            return result.data[0]
        return None

    async def get_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Get records with optional filtering

        Args:
            filters: Equality conditions
            limit: Maximum records to return
            order_by: Order by column, prefix with '-' for descending

        Returns:
            List of records
        """
        try:
            query = self.db.table(self.table_name).select("*")

            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)

            if order_by:
                desc = order_by.startswith('-')
                column = order_by[1:] if desc else order_by
                query = query.order(column, desc=desc)

            if limit:
                query = query.limit(limit)

            result = query.execute()
            return result.data or []

        except Exception as e:
            logger.error(f"Get all failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")
