"""Abstract interface for speech-to-text providers."""

from abc import ABC, abstractmethod

from domain.models import TranscriptionResult, UploadedAudio


class TranscriptionProvider(ABC):
    """Abstract base class for transcription backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier reported in results and errors."""

    @abstractmethod
    def transcribe(self, audio: UploadedAudio) -> TranscriptionResult:
        """
        Transcribes an audio file held in transient storage.

        Args:
            audio: The uploaded audio to transcribe.

        Returns:
            TranscriptionResult with the transcript text.

        Raises:
            ProviderError: If the provider call fails for any reason.
        """
