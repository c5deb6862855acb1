"""Google Cloud Speech-to-Text implementation of the TranscriptionProvider interface."""

from google.api_core import exceptions as google_exceptions
from google.cloud import speech
from transcription_common.logging import setup_logging

from config import GoogleSpeechConfig, TimeoutConfig
from domain.models import TranscriptionResult, UploadedAudio
from exceptions import ProviderError, ProviderErrorKind, classify_status
from interfaces import TranscriptionProvider

logger = setup_logging()

_Encoding = speech.RecognitionConfig.AudioEncoding

# Formats without a self-describing header need an explicit sample rate.
_ENCODINGS_BY_EXTENSION = {
    ".wav": (_Encoding.LINEAR16, False),
    ".mp3": (_Encoding.MP3, True),
    ".webm": (_Encoding.WEBM_OPUS, True),
    ".ogg": (_Encoding.OGG_OPUS, True),
}


class GoogleSpeechTranscriber(TranscriptionProvider):
    """Handles audio transcription using Google Cloud Speech-to-Text."""

    def __init__(
        self,
        client: speech.SpeechClient,
        config: GoogleSpeechConfig,
        timeouts: TimeoutConfig,
    ):
        self._client = client
        self._config = config
        self._timeouts = timeouts

    @property
    def name(self) -> str:
        return "google"

    def transcribe(self, audio: UploadedAudio) -> TranscriptionResult:
        """
        Transcribes audio with a synchronous recognize call.

        The client library sends the content base64-encoded together with
        the encoding, sample rate and channel count derived from the file
        extension. Retries are disabled; the provider chain handles fallback.
        """
        content = self._read(audio)
        timeout = self._timeouts.for_size(audio.size_bytes)

        try:
            response = self._client.recognize(
                config=self._recognition_config(audio.extension),
                audio=speech.RecognitionAudio(content=content),
                retry=None,
                timeout=timeout,
            )
        except google_exceptions.RetryError as e:
            logger.exception("Google Speech call timed out", extra={"timeout": timeout})
            raise ProviderError(self.name, ProviderErrorKind.TIMEOUT, str(e), e) from e
        except google_exceptions.GoogleAPICallError as e:
            kind = classify_status(e.code)
            logger.exception(
                "Google Speech API call failed",
                extra={"status": e.code, "kind": kind.value},
            )
            raise ProviderError(self.name, kind, e.message or str(e), e) from e
        except Exception as e:
            logger.exception("Google Speech client failed")
            raise ProviderError(self.name, ProviderErrorKind.UNKNOWN, str(e), e) from e

        parts = [
            result.alternatives[0].transcript.strip()
            for result in response.results
            if result.alternatives
        ]
        transcript = " ".join(p for p in parts if p)
        if not transcript:
            raise ProviderError(
                self.name, ProviderErrorKind.UNKNOWN, "No transcription returned"
            )

        language_code = next(
            (r.language_code for r in response.results if r.language_code),
            self._config.language_code,
        )
        logger.info(
            "Google Speech transcription successful",
            extra={"characters": len(transcript), "language_code": language_code},
        )
        return TranscriptionResult(
            transcript=transcript,
            provider=self.name,
            language_code=language_code,
        )

    def _recognition_config(self, extension: str) -> speech.RecognitionConfig:
        encoding, needs_sample_rate = _ENCODINGS_BY_EXTENSION.get(
            extension, (_Encoding.ENCODING_UNSPECIFIED, False)
        )
        config = speech.RecognitionConfig(
            encoding=encoding,
            audio_channel_count=self._config.audio_channel_count,
            language_code=self._config.language_code,
            enable_automatic_punctuation=True,
        )
        if needs_sample_rate:
            config.sample_rate_hertz = self._config.sample_rate_hertz
        return config

    def _read(self, audio: UploadedAudio) -> bytes:
        try:
            with open(audio.path, "rb") as f:
                return f.read()
        except OSError as e:
            raise ProviderError(
                self.name, ProviderErrorKind.UNKNOWN, f"Could not read audio: {e}", e
            ) from e
