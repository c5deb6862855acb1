"""Domain layer containing business logic and models."""

from .models import (
    PersistedRecord,
    PipelineResult,
    PipelineStage,
    TranscriptionResult,
    UploadedAudio,
)
from .upload_receiver import TransientAudio, UploadReceiver

__all__ = [
    "PersistedRecord",
    "PipelineResult",
    "PipelineStage",
    "TranscriptionResult",
    "UploadedAudio",
    "TransientAudio",
    "UploadReceiver",
]
