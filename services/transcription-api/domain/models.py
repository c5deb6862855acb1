"""Domain models for the transcription service."""

import os
from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class PipelineStage(str, Enum):
    """Lifecycle of a single transcription request."""

    RECEIVED = "Received"
    VALIDATED = "Validated"
    TRANSCRIBING = "Transcribing"
    PERSISTING = "Persisting"
    FAILED = "Failed"
    CLEANED = "Cleaned"
    RESPONDED = "Responded"


class UploadedAudio(BaseModel, frozen=True):
    """An accepted upload held in transient storage for one request."""

    path: str
    original_filename: str
    mime_type: str
    size_bytes: int

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.path)[1].lower()


class TranscriptionResult(BaseModel, frozen=True):
    """Transcript produced by a single provider."""

    transcript: str
    provider: str
    language_code: str | None = None


class PersistedRecord(BaseModel, frozen=True):
    """A transcript row stored alongside its audio file."""

    audio_url: str
    transcript: str
    user_id: str
    created_at: datetime
    record_id: str | None = None


class PipelineResult(BaseModel, frozen=True):
    """Outcome of a successful transcription request."""

    transcription: TranscriptionResult
    record: PersistedRecord
