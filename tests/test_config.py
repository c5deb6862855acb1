import pytest

from config import MEGABYTE, TimeoutConfig, load_config

_ENV_VARS = [
    "APP_ENV",
    "CORS_ORIGINS",
    "FRONTEND_URL",
    "MAX_UPLOAD_BYTES",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GOOGLE_CLOUD_ENABLED",
    "DEEPGRAM_API_KEY",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "SUPABASE_VERIFY_WRITES",
    "PROVIDER_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("config.load_dotenv", lambda *_, **__: None)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config.is_production
    assert config.upload.max_size_bytes == 25 * MEGABYTE
    assert "audio/x-m4a" in config.upload.allowed_mime_types
    assert "video/mp4" not in config.upload.allowed_mime_types
    assert config.google.enabled is False
    assert config.deepgram.is_configured is False
    assert config.deepgram.model == "nova-2"
    assert config.supabase.is_configured is False
    assert config.supabase.bucket_name == "audio-files"
    assert config.supabase.table_name == "transcriptions"
    assert config.supabase.verify_writes is True
    assert config.timeouts.request_timeout_seconds == 30.0


def test_production_without_origins_allows_none():
    assert load_config().cors_origins == ()


def test_development_defaults_to_localhost_origin(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")

    config = load_config()

    assert not config.is_production
    assert config.cors_origins == ("http://localhost:3000",)


def test_frontend_url_joins_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("FRONTEND_URL", "https://app.example")

    assert load_config().cors_origins == (
        "https://a.example",
        "https://b.example",
        "https://app.example",
    )


def test_credentials_enable_google(monkeypatch):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/secrets/sa.json")

    config = load_config()

    assert config.google.enabled is True
    assert config.google.credentials_path == "/secrets/sa.json"


def test_google_can_be_disabled_explicitly(monkeypatch):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/secrets/sa.json")
    monkeypatch.setenv("GOOGLE_CLOUD_ENABLED", "false")

    assert load_config().google.enabled is False


def test_provider_and_storage_keys(monkeypatch):
    monkeypatch.setenv("DEEPGRAM_API_KEY", "dg")
    monkeypatch.setenv("SUPABASE_URL", "https://p.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "k")
    monkeypatch.setenv("SUPABASE_VERIFY_WRITES", "0")
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "1000")

    config = load_config()

    assert config.deepgram.is_configured
    assert config.supabase.is_configured
    assert config.supabase.verify_writes is False
    assert config.upload.max_size_bytes == 1000


def test_config_immutable():
    config = load_config()

    with pytest.raises(Exception):
        config.environment = "development"


def test_timeout_scales_with_file_size():
    timeouts = TimeoutConfig(
        request_timeout_seconds=30,
        large_file_timeout_seconds=60,
        large_file_threshold_bytes=100,
    )

    assert timeouts.for_size(100) == 30
    assert timeouts.for_size(101) == 60
