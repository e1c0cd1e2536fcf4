"""Provider clients for the ElevenLabs REST API and Google Cloud Text-to-Speech."""

from .elevenlabs_client import ElevenLabsClient
from .google_client import GoogleSpeechClient

__all__ = ["ElevenLabsClient", "GoogleSpeechClient"]
