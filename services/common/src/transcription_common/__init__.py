from transcription_common.config import SupabaseConfig
from transcription_common.exceptions import (
    AudioNotFoundError,
    InsertFailedError,
    PersistenceError,
    StorageUploadFailedError,
)
from transcription_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "PersistenceError",
    "AudioNotFoundError",
    "StorageUploadFailedError",
    "InsertFailedError",
    "SupabaseConfig",
]
