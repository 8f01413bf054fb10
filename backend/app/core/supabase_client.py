"""
Supabase client configuration and initialization.
"""
from typing import Optional

from supabase import create_client, Client
from .config import settings


class SupabaseClient:
    """Supabase client wrapper for profile reads and writes."""

    def __init__(self):
        self._service_client: Optional[Client] = None

    @property
    def service_client(self) -> Client:
        """Get the service role client (bypasses RLS; callers scope by profile id)."""
        if not self._service_client:
            self._service_client = create_client(
                settings.supabase_url,
                settings.supabase_service_role_key
            )
        return self._service_client


# Global Supabase client instance
supabase_client = SupabaseClient()
