"""Shared configuration models for infrastructure components."""

from pydantic import BaseModel


class SupabaseConfig(BaseModel, frozen=True):
    """Supabase project connection configuration."""

    url: str
    key: str
    bucket_name: str = "audio-files"
    table_name: str = "transcriptions"
    timeout_seconds: int = 30
    verify_writes: bool = True

    @property
    def is_configured(self) -> bool:
        """True when both the project URL and API key are set."""
        return bool(self.url and self.key)
