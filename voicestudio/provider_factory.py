"""Provider factory helpers for the synthesis gateway and catalogs.

Responsibilities:
- Resolve provider identifiers to concrete `TtsProvider` implementations.
- Keep the HTTP layer independent from concrete client construction.
"""

from __future__ import annotations

from .catalog import CatalogProvider
from .clients.elevenlabs_client import ElevenLabsClient
from .clients.google_client import GoogleSpeechClient
from .config import StudioConfig
from .tts.synthesizer import CloudNeuralProvider, RemoteApiProvider, TtsProvider


class ProviderFactory:
    """Factory for provider-backed clients used by the web application."""

    @staticmethod
    def create_elevenlabs_client(config: StudioConfig, api_key: str | None) -> ElevenLabsClient:
        """Create the ElevenLabs HTTP client from configuration."""

        return ElevenLabsClient(
            api_key=api_key,
            base_url=config.elevenlabs_base_url,
            timeout_seconds=config.request_timeout_seconds,
        )

    @staticmethod
    def create_tts_provider(
        provider_id: str,
        config: StudioConfig,
        api_key: str | None = None,
    ) -> TtsProvider:
        """Create a TTS provider for a configured provider identifier."""

        if provider_id == "elevenlabs":
            return RemoteApiProvider(
                client=ProviderFactory.create_elevenlabs_client(config, api_key),
            )
        if provider_id == "google":
            return CloudNeuralProvider(
                client=GoogleSpeechClient(timeout_seconds=config.request_timeout_seconds),
                language_code=config.language_code,
                strict_voice_styles=config.strict_voice_styles,
            )
        raise ValueError(f"Unsupported TTS provider `{provider_id}`.")

    @staticmethod
    def create_catalog(config: StudioConfig, api_key: str | None = None) -> CatalogProvider:
        """Create the voice/model catalog backed by the ElevenLabs client."""

        return CatalogProvider(client=ProviderFactory.create_elevenlabs_client(config, api_key))
