"""Integration-test fixtures isolating tests from host environment and network."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear Voice Studio environment variables and block real HTTP calls."""

    for name in (
        "ELEVENLABS_API_KEY",
        "ELEVENLABS_BASE_URL",
        "PORT",
        "VOICESTUDIO_HOST",
        "VOICESTUDIO_LANGUAGE_CODE",
        "VOICESTUDIO_MAX_TEXT_CHARS",
        "VOICESTUDIO_PROVIDERS",
        "VOICESTUDIO_REQUEST_TIMEOUT",
        "VOICESTUDIO_STRICT_VOICE_STYLES",
    ):
        monkeypatch.delenv(name, raising=False)

    def _unexpected_request(*args: object, **kwargs: object) -> object:
        """Fail loudly when a test would reach the real ElevenLabs API."""

        raise AssertionError(f"Unexpected HTTP request: {args!r}")

    monkeypatch.setattr(
        "voicestudio.clients.elevenlabs_client.requests.request",
        _unexpected_request,
    )
