from supabase import create_client, Client
from app.config import settings


class SupabaseNotConfigured(RuntimeError):
    """Raised when the Supabase URL or service key is missing from settings."""


def get_supabase_client() -> Client:
    """
    Create and return a Supabase client for the transactions store.
    Uses the service role key; callers scope every query by user_id.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
        raise SupabaseNotConfigured("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_KEY
    )
