"""Unit tests for the ElevenLabs HTTP client."""

from __future__ import annotations

import json

import pytest

from voicestudio.clients import elevenlabs_client as elevenlabs_http
from voicestudio.clients.elevenlabs_client import ElevenLabsClient
from voicestudio.errors import ProviderError


class _MockRequestsResponse:
    """Minimal requests response mock for HTTP transport patching."""

    def __init__(self, *, payload: bytes, status_code: int = 200) -> None:
        """Initialize response with raw payload bytes and HTTP status."""

        self.content = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        """Raise HTTPError when the response status represents a failure."""

        if self.status_code >= 400:
            raise elevenlabs_http.requests.HTTPError(
                f"HTTP {self.status_code} error",
                response=self,
            )


def _install_mock_request(
    monkeypatch: pytest.MonkeyPatch,
    response: _MockRequestsResponse,
) -> list[dict[str, object]]:
    """Patch `requests.request` and return the captured call log."""

    calls: list[dict[str, object]] = []

    def _mock_request(method: str, url: str, **kwargs: object) -> _MockRequestsResponse:
        """Record the outbound request and return the canned response."""

        calls.append({"method": method, "url": url, **kwargs})
        return response

    monkeypatch.setattr("voicestudio.clients.elevenlabs_client.requests.request", _mock_request)
    return calls


def test_synthesize_speech_posts_expected_payload(
    monkeypatch: pytest.MonkeyPatch,
    mpeg_bytes: bytes,
) -> None:
    """Speech synthesis should POST the voice settings and return audio bytes."""

    calls = _install_mock_request(monkeypatch, _MockRequestsResponse(payload=mpeg_bytes))
    client = ElevenLabsClient(api_key="key-123", base_url="https://api.example.test/v1/")

    audio = client.synthesize_speech(
        voice_id="voice-rachel",
        text="Hello",
        model_id="eleven_turbo_v2",
        voice_settings={"stability": 0.5},
    )

    assert audio == mpeg_bytes
    call = calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.test/v1/text-to-speech/voice-rachel"
    assert call["json"] == {
        "text": "Hello",
        "model_id": "eleven_turbo_v2",
        "voice_settings": {"stability": 0.5},
    }
    assert call["headers"]["xi-api-key"] == "key-123"  # type: ignore[index]
    assert call["headers"]["Accept"] == "audio/mpeg"  # type: ignore[index]


def test_synthesize_speech_includes_language_override(
    monkeypatch: pytest.MonkeyPatch,
    mpeg_bytes: bytes,
) -> None:
    """`language_id` should only be sent when an override is supplied."""

    calls = _install_mock_request(monkeypatch, _MockRequestsResponse(payload=mpeg_bytes))
    client = ElevenLabsClient(api_key="key-123")

    client.synthesize_speech(
        voice_id="v",
        text="Hola",
        model_id="m",
        voice_settings={},
        language_id="es",
    )

    assert calls[0]["json"]["language_id"] == "es"  # type: ignore[index]


def test_missing_api_key_fails_without_request(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing key should fail predictably before any network call."""

    calls = _install_mock_request(monkeypatch, _MockRequestsResponse(payload=b""))
    client = ElevenLabsClient(api_key="  ")

    with pytest.raises(ProviderError, match="Missing ElevenLabs API key") as exc_info:
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})

    assert exc_info.value.failure_kind == "invalid_api_key"
    assert calls == []


def test_http_error_uses_provider_detail_message(monkeypatch: pytest.MonkeyPatch) -> None:
    """Structured `detail.message` payloads should become the client-facing message."""

    body = json.dumps(
        {"detail": {"status": "quota_exceeded", "message": "This request exceeds your quota."}}
    ).encode("utf-8")
    _install_mock_request(monkeypatch, _MockRequestsResponse(payload=body, status_code=401))
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError) as exc_info:
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})

    error = exc_info.value
    assert error.message == "This request exceeds your quota."
    assert error.provider_code == "quota_exceeded"
    assert error.upstream_status == 401
    assert error.failure_kind == "invalid_api_key"


def test_http_error_without_structured_payload_uses_generic_message(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Unstructured error bodies should not leak into the client-facing message."""

    _install_mock_request(
        monkeypatch,
        _MockRequestsResponse(payload=b"<html>Traceback...</html>", status_code=500),
    )
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError) as exc_info:
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})

    assert exc_info.value.message == "Failed to generate audio. Check API Key or Quota."
    assert exc_info.value.failure_kind == "http_error"


def test_http_error_classifies_unknown_voice(monkeypatch: pytest.MonkeyPatch) -> None:
    """A 404 mentioning the voice should classify as an invalid voice."""

    body = json.dumps({"detail": {"status": "voice_not_found", "message": "Voice not found"}})
    _install_mock_request(
        monkeypatch,
        _MockRequestsResponse(payload=body.encode("utf-8"), status_code=404),
    )
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError) as exc_info:
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})

    assert exc_info.value.failure_kind == "invalid_voice"


def test_timeout_maps_to_timeout_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Transport timeouts should map to a timeout provider error."""

    def _mock_request(method: str, url: str, **kwargs: object) -> None:
        """Raise a requests timeout."""

        raise elevenlabs_http.requests.Timeout("read timed out")

    monkeypatch.setattr("voicestudio.clients.elevenlabs_client.requests.request", _mock_request)
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError, match="timed out") as exc_info:
        client.list_voices()

    assert exc_info.value.failure_kind == "timeout"


def test_connection_error_maps_to_transport_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Connection failures should map to transport errors."""

    def _mock_request(method: str, url: str, **kwargs: object) -> None:
        """Raise a requests connection error."""

        raise elevenlabs_http.requests.ConnectionError("network down")

    monkeypatch.setattr("voicestudio.clients.elevenlabs_client.requests.request", _mock_request)
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError, match="transport error") as exc_info:
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})

    assert exc_info.value.failure_kind == "transport"


def test_list_voices_returns_records(monkeypatch: pytest.MonkeyPatch) -> None:
    """Voice listing should return the raw record list."""

    body = json.dumps({"voices": [{"voice_id": "a"}, "junk", {"voice_id": "b"}]})
    calls = _install_mock_request(monkeypatch, _MockRequestsResponse(payload=body.encode()))
    client = ElevenLabsClient(api_key="key-123")

    assert client.list_voices() == [{"voice_id": "a"}, {"voice_id": "b"}]
    assert calls[0]["method"] == "GET"
    assert str(calls[0]["url"]).endswith("/voices")


def test_list_voices_rejects_malformed_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    """Non-JSON or shape-mismatched payloads should raise provider errors."""

    _install_mock_request(monkeypatch, _MockRequestsResponse(payload=b"not json"))
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError, match="invalid JSON"):
        client.list_voices()


def test_empty_speech_response_is_an_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty audio body should raise instead of returning silence."""

    _install_mock_request(monkeypatch, _MockRequestsResponse(payload=b""))
    client = ElevenLabsClient(api_key="key-123")

    with pytest.raises(ProviderError, match="response is empty"):
        client.synthesize_speech(voice_id="v", text="t", model_id="m", voice_settings={})
