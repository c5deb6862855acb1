import json

import httpx
import pytest

from config import DeepgramConfig, TimeoutConfig
from domain.models import UploadedAudio
from exceptions import ProviderError, ProviderErrorKind
from infrastructure import DeepgramTranscriber

DEEPGRAM_OK = {
    "results": {
        "channels": [
            {"alternatives": [{"transcript": " Hello world. ", "confidence": 0.98}]}
        ]
    }
}


@pytest.fixture
def audio(tmp_path):
    path = tmp_path / "audio-123.mp3"
    path.write_bytes(b"ID3fake-mp3")
    return UploadedAudio(
        path=str(path), original_filename="talk.mp3", mime_type="audio/mpeg", size_bytes=11
    )


def _transcriber(handler, config=None):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return DeepgramTranscriber(
        client, config or DeepgramConfig(api_key="dg-key"), TimeoutConfig()
    )


def test_sends_raw_audio_with_headers_and_params(audio):
    captured = {}

    def handler(request):
        captured["request"] = request
        return httpx.Response(200, json=DEEPGRAM_OK)

    result = _transcriber(handler).transcribe(audio)

    request = captured["request"]
    assert request.method == "POST"
    assert request.url.host == "api.deepgram.com"
    assert request.url.path == "/v1/listen"
    assert request.url.params["model"] == "nova-2"
    assert request.url.params["punctuate"] == "true"
    assert request.url.params["language"] == "en"
    assert request.headers["Authorization"] == "Token dg-key"
    assert request.headers["Content-Type"] == "audio/mpeg"
    assert request.content == b"ID3fake-mp3"

    assert result.transcript == "Hello world."
    assert result.provider == "deepgram"
    assert result.language_code == "en"


def test_uses_detected_language_when_present(audio):
    payload = json.loads(json.dumps(DEEPGRAM_OK))
    payload["results"]["channels"][0]["detected_language"] = "es"

    result = _transcriber(lambda r: httpx.Response(200, json=payload)).transcribe(audio)

    assert result.language_code == "es"


def test_large_files_get_longer_timeout(audio):
    captured = {}

    def handler(request):
        captured["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json=DEEPGRAM_OK)

    large = audio.model_copy(update={"size_bytes": 20 * 1024 * 1024})
    _transcriber(handler).transcribe(large)

    assert captured["timeout"]["read"] == 60.0


@pytest.mark.parametrize(
    "status, kind",
    [
        (401, ProviderErrorKind.AUTH_ERROR),
        (413, ProviderErrorKind.PAYLOAD_TOO_LARGE),
        (400, ProviderErrorKind.UNSUPPORTED_FORMAT),
        (503, ProviderErrorKind.UPSTREAM_UNAVAILABLE),
        (418, ProviderErrorKind.UNKNOWN),
    ],
)
def test_http_status_mapped_to_error_kind(audio, status, kind):
    transcriber = _transcriber(lambda r: httpx.Response(status, text="nope"))

    with pytest.raises(ProviderError) as exc_info:
        transcriber.transcribe(audio)

    assert exc_info.value.kind is kind
    assert exc_info.value.provider == "deepgram"
    assert str(status) in exc_info.value.message


def test_network_timeout_maps_to_timeout(audio):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ProviderError) as exc_info:
        _transcriber(handler).transcribe(audio)

    assert exc_info.value.kind is ProviderErrorKind.TIMEOUT


def test_connection_error_maps_to_upstream_unavailable(audio):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ProviderError) as exc_info:
        _transcriber(handler).transcribe(audio)

    assert exc_info.value.kind is ProviderErrorKind.UPSTREAM_UNAVAILABLE


def test_empty_transcript_is_a_failure(audio):
    payload = {"results": {"channels": [{"alternatives": [{"transcript": ""}]}]}}

    with pytest.raises(ProviderError, match="No transcription returned"):
        _transcriber(lambda r: httpx.Response(200, json=payload)).transcribe(audio)


def test_missing_results_is_a_failure(audio):
    with pytest.raises(ProviderError) as exc_info:
        _transcriber(lambda r: httpx.Response(200, json={"metadata": {}})).transcribe(audio)

    assert exc_info.value.kind is ProviderErrorKind.UNKNOWN
