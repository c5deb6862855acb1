"""Deepgram implementation of the TranscriptionProvider interface."""

import httpx
from transcription_common.logging import setup_logging

from config import DeepgramConfig, TimeoutConfig
from domain.audio_formats import content_type_for
from domain.models import TranscriptionResult, UploadedAudio
from exceptions import ProviderError, ProviderErrorKind, classify_status
from interfaces import TranscriptionProvider

logger = setup_logging()


class DeepgramTranscriber(TranscriptionProvider):
    """Handles audio transcription using the Deepgram pre-recorded API."""

    def __init__(
        self,
        client: httpx.Client,
        config: DeepgramConfig,
        timeouts: TimeoutConfig,
    ):
        self._client = client
        self._config = config
        self._timeouts = timeouts

    @property
    def name(self) -> str:
        return "deepgram"

    def transcribe(self, audio: UploadedAudio) -> TranscriptionResult:
        """
        Sends the raw audio bytes to Deepgram and extracts the transcript.

        Raises:
            ProviderError: On timeouts, HTTP errors or an empty transcript.
        """
        try:
            with open(audio.path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise ProviderError(
                self.name, ProviderErrorKind.UNKNOWN, f"Could not read audio: {e}", e
            ) from e

        timeout = self._timeouts.for_size(audio.size_bytes)
        logger.info(
            "Sending audio to Deepgram",
            extra={"size": len(content), "model": self._config.model},
        )

        try:
            response = self._client.post(
                self._config.base_url,
                params=self._params(),
                headers={
                    "Authorization": f"Token {self._config.api_key}",
                    "Content-Type": content_type_for(audio.extension),
                },
                content=content,
                timeout=timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.exception("Deepgram request timed out", extra={"timeout": timeout})
            raise ProviderError(self.name, ProviderErrorKind.TIMEOUT, str(e), e) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            kind = classify_status(status)
            logger.exception(
                "Deepgram API error",
                extra={"status": status, "kind": kind.value, "body": e.response.text[:500]},
            )
            raise ProviderError(
                self.name, kind, f"HTTP {status}: {e.response.text[:200]}", e
            ) from e
        except httpx.RequestError as e:
            logger.exception("Deepgram request failed")
            raise ProviderError(
                self.name, ProviderErrorKind.UPSTREAM_UNAVAILABLE, str(e), e
            ) from e
        except ValueError as e:
            logger.exception("Deepgram returned invalid JSON")
            raise ProviderError(self.name, ProviderErrorKind.UNKNOWN, str(e), e) from e

        transcript, language_code = self._extract(payload)
        if not transcript:
            raise ProviderError(
                self.name,
                ProviderErrorKind.UNKNOWN,
                "No transcription returned from Deepgram",
            )

        logger.info(
            "Deepgram transcription successful", extra={"characters": len(transcript)}
        )
        return TranscriptionResult(
            transcript=transcript,
            provider=self.name,
            language_code=language_code,
        )

    def _params(self) -> dict[str, str]:
        return {
            "model": self._config.model,
            "punctuate": str(self._config.punctuate).lower(),
            "smart_format": str(self._config.smart_format).lower(),
            "language": self._config.language,
        }

    def _extract(self, payload: dict) -> tuple[str, str | None]:
        """Pulls the first alternative's transcript out of a Deepgram response."""
        try:
            channel = payload["results"]["channels"][0]
            transcript = channel["alternatives"][0]["transcript"]
        except (KeyError, IndexError, TypeError):
            return "", None
        language_code = channel.get("detected_language") or self._config.language
        return (transcript or "").strip(), language_code
