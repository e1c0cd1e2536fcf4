"""Shared pytest fixtures for the full Voice Studio test suite."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from flask import Flask

from voicestudio.catalog import CatalogProvider
from voicestudio.clients.elevenlabs_client import ElevenLabsClient
from voicestudio.clients.google_client import GoogleSpeechClient
from voicestudio.config import StudioConfig
from voicestudio.tts.synthesizer import CloudNeuralProvider, RemoteApiProvider
from voicestudio.web.app import build_services, create_app
from voicestudio.web.services import StudioServices

# ID3v2.4 header followed by one MPEG-1 Layer III frame sync.
MPEG_BYTES = b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x64" + b"\x00" * 64

VOICE_RECORDS: list[dict[str, Any]] = [
    {
        "voice_id": "voice-rachel",
        "name": "Rachel",
        "category": "premade",
        "labels": {"accent": "American", "language": "en"},
        "preview_url": "https://example.test/rachel.mp3",
    },
    {
        "voice_id": "voice-george",
        "name": "George",
        "labels": {"accent": "British", "age": "middle aged"},
    },
]


class RecordingElevenLabsClient(ElevenLabsClient):
    """ElevenLabs client double that records calls instead of using the network."""

    def __init__(self) -> None:
        """Initialize with a test key, default voices, and no injected error."""

        super().__init__(api_key="test-key")
        self.speech_calls: list[dict[str, Any]] = []
        self.voice_records: list[dict[str, Any]] = list(VOICE_RECORDS)
        self.error: Exception | None = None

    def synthesize_speech(self, **kwargs: Any) -> bytes:
        """Record the call and return deterministic MPEG bytes."""

        self.speech_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return MPEG_BYTES

    def list_voices(self) -> list[dict[str, Any]]:
        """Return configured raw voice records."""

        if self.error is not None:
            raise self.error
        return list(self.voice_records)


class FakeTextToSpeechSdk:
    """Stand-in for `texttospeech.TextToSpeechClient` recording synthesis calls."""

    def __init__(self) -> None:
        """Initialize call log and optional injected error."""

        self.calls: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def synthesize_speech(self, **kwargs: Any) -> SimpleNamespace:
        """Record the SDK request and return an MPEG payload."""

        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(audio_content=MPEG_BYTES)


@pytest.fixture
def mpeg_bytes() -> bytes:
    """Provide deterministic MPEG audio bytes."""

    return MPEG_BYTES


@pytest.fixture
def elevenlabs_client() -> RecordingElevenLabsClient:
    """Provide a recording ElevenLabs client double."""

    return RecordingElevenLabsClient()


@pytest.fixture
def tts_sdk() -> FakeTextToSpeechSdk:
    """Provide a fake Google SDK client."""

    return FakeTextToSpeechSdk()


@pytest.fixture
def studio_config() -> StudioConfig:
    """Provide default configuration without environment lookups."""

    return StudioConfig()


@pytest.fixture
def provider_overrides(
    elevenlabs_client: RecordingElevenLabsClient,
    tts_sdk: FakeTextToSpeechSdk,
    studio_config: StudioConfig,
) -> dict[str, Any]:
    """Provide real providers wired to network-free client doubles."""

    return {
        "providers": {
            "elevenlabs": RemoteApiProvider(client=elevenlabs_client),
            "google": CloudNeuralProvider(
                client=GoogleSpeechClient(sdk_client=tts_sdk),
                language_code=studio_config.language_code,
            ),
        },
        "catalog": CatalogProvider(client=elevenlabs_client),
    }


@pytest.fixture
def studio_services(studio_config: StudioConfig, provider_overrides: dict[str, Any]) -> StudioServices:
    """Provide services built from network-free providers."""

    return build_services(studio_config, **provider_overrides)


@pytest.fixture
def studio_app(studio_config: StudioConfig, provider_overrides: dict[str, Any]) -> Flask:
    """Provide a Flask app backed by network-free providers."""

    app = create_app(studio_config, **provider_overrides)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(studio_app: Flask):
    """Provide a Flask test client."""

    return studio_app.test_client()
