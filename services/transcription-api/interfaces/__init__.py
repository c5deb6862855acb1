"""Abstract interfaces for infrastructure dependencies."""

from transcription_common.infrastructure.interfaces import AudioStorage

from .transcript_repository import TranscriptRepository
from .transcription_provider import TranscriptionProvider

__all__ = ["AudioStorage", "TranscriptRepository", "TranscriptionProvider"]
