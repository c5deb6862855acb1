"""Application configuration loaded from environment variables."""

import os
import tempfile

from dotenv import load_dotenv
from pydantic import BaseModel
from transcription_common import SupabaseConfig

MEGABYTE = 1024 * 1024

DEFAULT_ALLOWED_MIME_TYPES = (
    "audio/wav",
    "audio/mpeg",
    "audio/mp3",
    "audio/webm",
    "audio/ogg",
    "audio/x-wav",
    "audio/x-m4a",
)


class UploadConfig(BaseModel, frozen=True):
    """Transient upload storage and validation limits."""

    upload_dir: str
    max_size_bytes: int = 25 * MEGABYTE
    allowed_mime_types: tuple[str, ...] = DEFAULT_ALLOWED_MIME_TYPES


class TimeoutConfig(BaseModel, frozen=True):
    """Outbound provider call timeouts, scaled by file size."""

    request_timeout_seconds: float = 30.0
    large_file_timeout_seconds: float = 60.0
    large_file_threshold_bytes: int = 10 * MEGABYTE

    def for_size(self, size_bytes: int) -> float:
        """Returns the timeout to use for a file of the given size."""
        if size_bytes > self.large_file_threshold_bytes:
            return self.large_file_timeout_seconds
        return self.request_timeout_seconds


class GoogleSpeechConfig(BaseModel, frozen=True):
    """Google Cloud Speech-to-Text configuration."""

    enabled: bool = False
    credentials_path: str | None = None
    language_code: str = "en-US"
    sample_rate_hertz: int = 48000
    audio_channel_count: int = 1


class DeepgramConfig(BaseModel, frozen=True):
    """Deepgram API configuration."""

    api_key: str = ""
    base_url: str = "https://api.deepgram.com/v1/listen"
    model: str = "nova-2"
    language: str = "en"
    punctuate: bool = True
    smart_format: bool = True

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    environment: str = "production"
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)
    upload: UploadConfig
    timeouts: TimeoutConfig = TimeoutConfig()
    google: GoogleSpeechConfig = GoogleSpeechConfig()
    deepgram: DeepgramConfig = DeepgramConfig()
    supabase: SupabaseConfig

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_origins(environment: str) -> tuple[str, ...]:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url and frontend_url not in origins:
        origins.append(frontend_url)
    if not origins and environment.lower() != "production":
        origins = ["http://localhost:3000"]
    return tuple(origins)


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    load_dotenv()

    environment = os.getenv("APP_ENV", "production")
    credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None

    return AppConfig(
        environment=environment,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=_get_origins(environment),
        upload=UploadConfig(
            upload_dir=os.getenv(
                "UPLOAD_DIR",
                os.path.join(tempfile.gettempdir(), "transcription-uploads"),
            ),
            max_size_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(25 * MEGABYTE))),
        ),
        timeouts=TimeoutConfig(
            request_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30")),
            large_file_timeout_seconds=float(
                os.getenv("PROVIDER_LARGE_FILE_TIMEOUT_SECONDS", "60")
            ),
            large_file_threshold_bytes=int(
                os.getenv("PROVIDER_LARGE_FILE_THRESHOLD_BYTES", str(10 * MEGABYTE))
            ),
        ),
        google=GoogleSpeechConfig(
            enabled=_get_bool("GOOGLE_CLOUD_ENABLED", credentials_path is not None),
            credentials_path=credentials_path,
            language_code=os.getenv("GOOGLE_SPEECH_LANGUAGE", "en-US"),
            sample_rate_hertz=int(os.getenv("GOOGLE_SPEECH_SAMPLE_RATE", "48000")),
            audio_channel_count=int(os.getenv("GOOGLE_SPEECH_CHANNELS", "1")),
        ),
        deepgram=DeepgramConfig(
            api_key=os.getenv("DEEPGRAM_API_KEY", ""),
            model=os.getenv("DEEPGRAM_MODEL", "nova-2"),
            language=os.getenv("DEEPGRAM_LANGUAGE", "en"),
        ),
        supabase=SupabaseConfig(
            url=os.getenv("SUPABASE_URL", ""),
            key=os.getenv("SUPABASE_KEY", ""),
            bucket_name=os.getenv("SUPABASE_BUCKET", "audio-files"),
            table_name=os.getenv("SUPABASE_TABLE", "transcriptions"),
            timeout_seconds=int(os.getenv("SUPABASE_TIMEOUT_SECONDS", "30")),
            verify_writes=_get_bool("SUPABASE_VERIFY_WRITES", True),
        ),
    )
