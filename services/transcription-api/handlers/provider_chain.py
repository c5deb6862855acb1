"""Ordered provider fallback for transcription."""

from transcription_common.logging import setup_logging

from domain.models import TranscriptionResult, UploadedAudio
from exceptions import ProviderError, ProviderErrorKind, TranscriptionUnavailableError
from interfaces import TranscriptionProvider

logger = setup_logging()

# Primary plus a single fallback.
MAX_PROVIDERS = 2


class ProviderChain:
    """
    Tries transcription providers in a fixed order, stopping at the first success.

    Every attempt is reduced to either a TranscriptionResult or a ProviderError,
    so fallback is a plain loop over outcomes. There are no retries: each
    provider is called at most once per request.
    """

    def __init__(self, providers: list[TranscriptionProvider]):
        if len(providers) > MAX_PROVIDERS:
            raise ValueError(
                f"At most {MAX_PROVIDERS} providers are supported, got {len(providers)}"
            )
        self._providers = tuple(providers)

    @property
    def configured_providers(self) -> list[str]:
        return [p.name for p in self._providers]

    def transcribe(
        self, audio: UploadedAudio
    ) -> TranscriptionResult | ProviderError:
        """
        Transcribes audio with the first provider that succeeds.

        Returns:
            The winning TranscriptionResult, or a TranscriptionUnavailableError
            aggregating every attempt when none succeeded or none is configured.
        """
        errors: list[ProviderError] = []

        for provider in self._providers:
            outcome = self._attempt(provider, audio)
            if isinstance(outcome, TranscriptionResult):
                if errors:
                    logger.warning(
                        "Transcribed with fallback provider",
                        extra={
                            "provider": provider.name,
                            "failed": [e.provider for e in errors],
                        },
                    )
                return outcome
            errors.append(outcome)

        logger.error(
            "No transcription provider succeeded",
            extra={
                "attempted": [e.provider for e in errors],
                "kinds": [e.kind.value for e in errors],
            },
        )
        return TranscriptionUnavailableError(errors)

    def _attempt(
        self, provider: TranscriptionProvider, audio: UploadedAudio
    ) -> TranscriptionResult | ProviderError:
        logger.info(
            "Attempting transcription",
            extra={"provider": provider.name, "file_name": audio.file_name},
        )
        try:
            return provider.transcribe(audio)
        except ProviderError as e:
            logger.warning(
                "Transcription provider failed",
                extra={"provider": e.provider, "kind": e.kind.value, "error": e.message},
            )
            return e
        except Exception as e:
            logger.exception(
                "Unexpected transcription provider failure",
                extra={"provider": provider.name},
            )
            return ProviderError(provider.name, ProviderErrorKind.UNKNOWN, str(e), e)
