"""
Database connection management.

Provides the Supabase client singleton used by the storage services.
"""

from supabase import create_client, Client
from functools import lru_cache
from typing import Optional
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class SupabaseConnectionError(Exception):
    """Failed to create the Supabase client."""
    pass


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.

    Uses lru_cache to ensure only one client is created.
    Call get_supabase_client.cache_clear() to reconnect.

    Returns:
        Client: Supabase client

    Raises:
        SupabaseConnectionError: If connection fails
    """
    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )

        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )

        logger.info(
            "supabase_connected",
            status="success"
        )

        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise SupabaseConnectionError(f"Failed to connect to Supabase: {e}") from e


def get_admin_client() -> Optional[Client]:
    """
    Get Supabase client with service role key (admin access).

    Only available if SUPABASE_SERVICE_KEY is configured. Used by the
    command-line importer, which runs outside row-level security.

    Returns:
        Client: Admin Supabase client, or None if not configured
    """
    if not settings.supabase_service_key:
        logger.warning("admin_client_not_configured")
        return None

    try:
        return create_client(
            settings.supabase_url,
            settings.supabase_service_key
        )
    except Exception as e:
        logger.error(
            "admin_client_failed",
            error=str(e)
        )
        return None


# ===================
# HELPER FUNCTIONS
# ===================

def check_connection() -> dict:
    """
    Check database connection health.

    Returns:
        dict: Connection status with details
    """
    try:
        client = get_supabase_client()

        products = (
            client.table(settings.products_table)
            .select("id", count="exact")
            .limit(1)
            .execute()
        )

        return {
            "status": "healthy",
            "products_count": products.count,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
