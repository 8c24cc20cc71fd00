"""
Oche - Supabase Client

Thread-safe singleton factory for the Supabase client used to store
finished games. Remote calls are bounded by the configured timeout.
"""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from src.config.settings import get_settings


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    settings = get_settings()
    options = ClientOptions(postgrest_client_timeout=settings.remote_timeout)
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)
