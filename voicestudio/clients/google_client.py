"""Google Cloud Text-to-Speech client wrapper.

Responsibilities:
- Build SDK synthesis requests from SSML and audio parameters.
- Create the SDK client lazily so missing credentials fail requests, not startup.
- Map SDK and credential failures to `ProviderError`.
"""

from __future__ import annotations

from typing import Any

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import texttospeech

from ..errors import ProviderError


class GoogleSpeechClient:
    """Thin wrapper around `texttospeech.TextToSpeechClient`."""

    _MAX_PROVIDER_MESSAGE_CHARS = 180

    def __init__(self, sdk_client: Any | None = None, timeout_seconds: float = 60.0) -> None:
        """Initialize the wrapper with an optional pre-built SDK client."""

        self._sdk_client = sdk_client
        self.timeout_seconds = timeout_seconds

    def _client(self) -> Any:
        """Return the SDK client, creating it from default credentials on first use."""

        if self._sdk_client is None:
            try:
                self._sdk_client = texttospeech.TextToSpeechClient()
            except auth_exceptions.DefaultCredentialsError as exc:
                raise ProviderError(
                    "Google Cloud credentials are not configured. Set "
                    "`GOOGLE_APPLICATION_CREDENTIALS` to a service account key file.",
                    failure_kind="invalid_api_key",
                ) from exc
        return self._sdk_client

    def synthesize_ssml(
        self,
        *,
        ssml: str,
        voice_name: str,
        language_code: str,
        pitch: float,
        speaking_rate: float,
        volume_gain_db: float = 0.0,
    ) -> bytes:
        """Return MP3 audio bytes for an SSML utterance."""

        client = self._client()
        try:
            response = client.synthesize_speech(
                input=texttospeech.SynthesisInput(ssml=ssml),
                voice=texttospeech.VoiceSelectionParams(
                    language_code=language_code,
                    name=voice_name,
                ),
                audio_config=texttospeech.AudioConfig(
                    audio_encoding=texttospeech.AudioEncoding.MP3,
                    pitch=pitch,
                    speaking_rate=speaking_rate,
                    volume_gain_db=volume_gain_db,
                ),
                timeout=self.timeout_seconds,
            )
        except google_exceptions.GoogleAPICallError as exc:
            raise ProviderError(
                self._short_message(exc.message or "Error generating speech"),
                failure_kind=self._classify(exc),
                status_code=exc.code if isinstance(exc.code, int) else None,
            ) from exc
        except google_exceptions.RetryError as exc:
            raise ProviderError("Google Cloud request timed out.", failure_kind="timeout") from exc
        except auth_exceptions.GoogleAuthError as exc:
            raise ProviderError(
                "Google Cloud authentication failed.",
                failure_kind="invalid_api_key",
            ) from exc

        audio_content = bytes(response.audio_content or b"")
        if not audio_content:
            raise ProviderError("Google Cloud speech response is empty.")
        return audio_content

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap user-facing provider message length."""

        compact = " ".join(str(text).split())
        if len(compact) <= cls._MAX_PROVIDER_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_PROVIDER_MESSAGE_CHARS - 1]}..."

    @staticmethod
    def _classify(exc: google_exceptions.GoogleAPICallError) -> str:
        """Classify SDK call failures into deterministic diagnostic kinds."""

        if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
            return "invalid_api_key"
        if isinstance(exc, google_exceptions.ResourceExhausted):
            return "insufficient_quota"
        if isinstance(exc, google_exceptions.DeadlineExceeded):
            return "timeout"
        if isinstance(exc, google_exceptions.InvalidArgument) and "voice" in str(exc.message).lower():
            return "invalid_voice"
        return "http_error"
