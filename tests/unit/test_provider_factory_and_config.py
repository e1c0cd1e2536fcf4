"""Unit tests for provider factory wiring and service construction."""

from __future__ import annotations

import pytest

from voicestudio.config import RuntimeConfigSources, StudioConfig
from voicestudio.provider_factory import ProviderFactory
from voicestudio.tts.synthesizer import CloudNeuralProvider, RemoteApiProvider
from voicestudio.web.app import build_services


def test_factory_builds_remote_provider_from_config() -> None:
    """The ElevenLabs provider should inherit base URL, timeout, and key."""

    config = StudioConfig(
        elevenlabs_base_url="https://proxy.example.test/v1/",
        request_timeout_seconds=12.5,
    )

    provider = ProviderFactory.create_tts_provider("elevenlabs", config, api_key="key-1")

    assert isinstance(provider, RemoteApiProvider)
    assert provider.client.api_key == "key-1"
    assert provider.client.base_url == "https://proxy.example.test/v1"
    assert provider.client.timeout_seconds == 12.5


def test_factory_builds_cloud_provider_without_credentials() -> None:
    """The cloud provider should be constructible before credentials exist."""

    config = StudioConfig(language_code="en-GB", strict_voice_styles=True)

    provider = ProviderFactory.create_tts_provider("google", config)

    assert isinstance(provider, CloudNeuralProvider)
    assert provider.language_code == "en-GB"
    assert provider.strict_voice_styles is True


def test_factory_rejects_unknown_provider() -> None:
    """Unknown provider identifiers should fail fast."""

    with pytest.raises(ValueError, match="Unsupported TTS provider `azure`"):
        ProviderFactory.create_tts_provider("azure", StudioConfig())


def test_build_services_creates_one_gateway_per_enabled_provider() -> None:
    """Only configured providers should receive a gateway."""

    services = build_services(
        StudioConfig(providers=("google",), max_text_chars=500),
        sources=RuntimeConfigSources(cli={"api_key": "cli-key"}),
    )

    assert list(services.gateways) == ["google"]
    assert services.gateways["google"].max_text_chars == 500
    assert services.catalog.client.api_key == "cli-key"
