import io
from unittest.mock import MagicMock

import pytest
from transcription_common import SupabaseConfig
from transcription_common.infrastructure import AudioStorage

from config import DEFAULT_ALLOWED_MIME_TYPES, AppConfig, TimeoutConfig, UploadConfig
from domain import UploadReceiver
from domain.models import TranscriptionResult
from handlers import PersistenceHandler, ProviderChain, TranscriptionPipeline
from interfaces import TranscriptionProvider, TranscriptRepository

WAV_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 64


class StubProvider(TranscriptionProvider):
    """Provider returning a fixed transcript or raising a fixed error."""

    def __init__(self, name, transcript=None, error=None, on_call=None):
        self._name = name
        self._transcript = transcript
        self._error = error
        self._on_call = on_call
        self.calls = []

    @property
    def name(self):
        return self._name

    def transcribe(self, audio):
        self.calls.append(audio)
        if self._on_call is not None:
            self._on_call(audio)
        if self._error is not None:
            raise self._error
        return TranscriptionResult(
            transcript=self._transcript, provider=self._name, language_code="en"
        )


@pytest.fixture
def stub_provider():
    return StubProvider


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def receiver(upload_dir):
    return UploadReceiver(
        upload_dir=str(upload_dir),
        max_size_bytes=1024,
        allowed_mime_types=DEFAULT_ALLOWED_MIME_TYPES,
    )


@pytest.fixture
def storage():
    storage = MagicMock(spec=AudioStorage)
    storage.get_public_url.side_effect = (
        lambda name: f"https://example.supabase.co/storage/v1/object/public/audio-files/{name}"
    )
    return storage


@pytest.fixture
def repository():
    repository = MagicMock(spec=TranscriptRepository)
    repository.insert.side_effect = lambda row: {"id": 7, **row}
    repository.get.side_effect = lambda record_id: {"id": record_id}
    return repository


@pytest.fixture
def persistence(storage, repository):
    return PersistenceHandler(storage, repository, verify_writes=True)


@pytest.fixture
def make_pipeline(receiver, persistence):
    def _make(*providers):
        return TranscriptionPipeline(receiver, ProviderChain(list(providers)), persistence)

    return _make


@pytest.fixture
def app_config(upload_dir):
    return AppConfig(
        environment="development",
        cors_origins=("http://localhost:3000",),
        upload=UploadConfig(upload_dir=str(upload_dir), max_size_bytes=1024),
        timeouts=TimeoutConfig(),
        supabase=SupabaseConfig(url="https://example.supabase.co", key="service-key"),
    )


@pytest.fixture
def wav_stream():
    return io.BytesIO(WAV_BYTES)
