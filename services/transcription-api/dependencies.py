"""FastAPI dependency injection configuration."""

import json
import threading

import httpx
from google.cloud import speech
from google.oauth2 import service_account
from transcription_common.logging import setup_logging
from transcription_common.supabase_client import get_supabase_client

from config import AppConfig, load_config
from domain import UploadReceiver
from handlers import PersistenceHandler, ProviderChain, TranscriptionPipeline
from infrastructure import (
    DeepgramTranscriber,
    GoogleSpeechTranscriber,
    SupabaseAudioStorage,
    SupabaseTranscriptRepository,
)
from interfaces import TranscriptionProvider

logger = setup_logging()

_config = load_config()

# Process-wide clients, built once by init_services().
_lock = threading.Lock()
_initialized = False
_http_client: httpx.Client | None = None
_provider_chain: ProviderChain | None = None
_persistence: PersistenceHandler | None = None
_receiver: UploadReceiver | None = None


def _build_google_client() -> speech.SpeechClient:
    credentials_value = _config.google.credentials_path
    if credentials_value and credentials_value.strip().startswith("{"):
        credentials = service_account.Credentials.from_service_account_info(
            json.loads(credentials_value)
        )
        return speech.SpeechClient(credentials=credentials)
    if credentials_value:
        return speech.SpeechClient.from_service_account_file(credentials_value)
    return speech.SpeechClient()


def _build_providers() -> list[TranscriptionProvider]:
    """Builds providers in fallback order: Google first, then Deepgram."""
    global _http_client

    providers: list[TranscriptionProvider] = []

    if _config.google.enabled:
        try:
            providers.append(
                GoogleSpeechTranscriber(
                    _build_google_client(), _config.google, _config.timeouts
                )
            )
            logger.info("Google Speech provider initialized")
        except Exception:
            logger.exception("Google Speech initialization failed, provider disabled")

    if _config.deepgram.is_configured:
        _http_client = httpx.Client(
            timeout=httpx.Timeout(_config.timeouts.request_timeout_seconds)
        )
        providers.append(
            DeepgramTranscriber(_http_client, _config.deepgram, _config.timeouts)
        )
        logger.info("Deepgram provider initialized", extra={"model": _config.deepgram.model})

    if not providers:
        logger.warning("No transcription provider is configured")
    return providers


def _build_persistence() -> PersistenceHandler | None:
    if not _config.supabase.is_configured:
        logger.warning("Supabase is not configured, transcripts cannot be stored")
        return None

    client = get_supabase_client(_config.supabase)
    logger.info(
        "Supabase initialized",
        extra={
            "bucket": _config.supabase.bucket_name,
            "table": _config.supabase.table_name,
        },
    )
    return PersistenceHandler(
        SupabaseAudioStorage(client, _config.supabase.bucket_name),
        SupabaseTranscriptRepository(client, _config.supabase.table_name),
        verify_writes=_config.supabase.verify_writes,
    )


def init_services() -> None:
    """Creates the provider, storage and upload singletons. Safe to call repeatedly."""
    global _initialized, _provider_chain, _persistence, _receiver

    with _lock:
        if _initialized:
            return
        _receiver = UploadReceiver(
            upload_dir=_config.upload.upload_dir,
            max_size_bytes=_config.upload.max_size_bytes,
            allowed_mime_types=_config.upload.allowed_mime_types,
        )
        _provider_chain = ProviderChain(_build_providers())
        _persistence = _build_persistence()
        _initialized = True


def close_services() -> None:
    """Releases the shared HTTP client."""
    if _http_client is not None:
        _http_client.close()


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def get_provider_chain() -> ProviderChain:
    """Returns the configured provider chain."""
    init_services()
    return _provider_chain


def get_storage_configured() -> bool:
    """Reports whether transcripts can be persisted."""
    return _config.supabase.is_configured


def get_pipeline() -> TranscriptionPipeline:
    """
    Returns a pipeline wired to the shared singletons.

    Without Supabase the pipeline still validates uploads and fails with
    PersistenceError before any provider is called.
    """
    init_services()
    return TranscriptionPipeline(_receiver, _provider_chain, _persistence)
