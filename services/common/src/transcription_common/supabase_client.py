import logging

from supabase import Client, ClientOptions, create_client

from transcription_common.config import SupabaseConfig

logger = logging.getLogger(__name__)


def get_supabase_client(config: SupabaseConfig) -> Client:
    """
    Initialize and return a Supabase client.

    Env Vars:
        SUPABASE_URL: project URL
        SUPABASE_KEY: service or anon key
        SUPABASE_TIMEOUT_SECONDS: storage and database call timeout

    Returns:
        Client: Configured Supabase client
    """
    try:
        options = ClientOptions(
            postgrest_client_timeout=config.timeout_seconds,
            storage_client_timeout=config.timeout_seconds,
        )
        return create_client(config.url, config.key, options=options)
    except Exception as e:
        logger.exception(
            "Supabase Client Initialization Failed",
            extra={"url": config.url},
        )
        raise e
