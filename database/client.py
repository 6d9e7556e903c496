"""
Supabase Database Client
"""
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
import logging

from config.settings import settings
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Global client instance
_supabase_client: Optional[Client] = None


class SupabaseClient:
    """Singleton Supabase client wrapper"""

    @classmethod
    def get_client(cls) -> Client:
        """Get or create Supabase client instance"""
        global _supabase_client

        if _supabase_client is None:
            _supabase_client = cls._create_client()

        return _supabase_client

    @classmethod
    def _create_client(cls) -> Client:
        """Create new Supabase client"""
        if not settings.has_supabase():
            raise ConfigurationError(
                "Supabase is not configured",
                details={"required": ["SUPABASE_URL", "SUPABASE_SERVICE_KEY"]}
            )

        try:
            # Service key: the ledger is written server-side only
            client = create_client(
                supabase_url=settings.supabase_url,
                supabase_key=settings.supabase_service_key,
                options=ClientOptions(
                    auto_refresh_token=False,
                    persist_session=False
                )
            )

            logger.info("✅ Supabase client created")
            return client

        except Exception as e:
            logger.error(f"❌ Failed to create Supabase client: {e}")
            raise

    @classmethod
    async def close(cls):
        """Drop the cached client"""
        global _supabase_client

        if _supabase_client:
            _supabase_client = None
            logger.info("✅ Supabase client closed")


async def init_supabase() -> Optional[Client]:
    """Initialize Supabase connection when configured"""
    if not settings.has_supabase():
        logger.warning("⚠️ Supabase not configured; using in-process stores")
        return None

    client = SupabaseClient.get_client()

    try:
        client.table('user_credits').select("user_id").limit(1).execute()
        logger.info("✅ Supabase connection verified")
        return client
    except Exception as e:
        logger.error(f"❌ Supabase connection test failed: {e}")
        raise


async def close_supabase():
    """Close Supabase connection"""
    await SupabaseClient.close()


def get_supabase() -> Client:
    """Get the shared Supabase client"""
    return SupabaseClient.get_client()


__all__ = [
    "init_supabase",
    "close_supabase",
    "get_supabase",
    "SupabaseClient"
]
