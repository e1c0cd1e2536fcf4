"""TTS provider interface and its cloud neural and remote API implementations.

Responsibilities:
- Define the protocol every provider implements for validation and synthesis.
- Map `SynthesisRequest` fields onto each provider's wire shape.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from ..clients.elevenlabs_client import ElevenLabsClient
from ..clients.google_client import GoogleSpeechClient
from ..errors import ValidationError
from ..models.datatypes import SynthesisRequest, SynthesisResult
from ..parsing import clamp, float_or_default, normalize_optional_string, parse_optional_float
from .voices import resolve_voice_selection, wrap_markup


PITCH_RANGE = (-20.0, 20.0)
SPEAKING_RATE_RANGE = (0.25, 4.0)

DEFAULT_STABILITY = 0.5
DEFAULT_SIMILARITY_BOOST = 0.75
DEFAULT_STYLE_EXAGGERATION = 0.0

MPEG_CONTENT_TYPE = "audio/mpeg"


class TtsProvider(Protocol):
    """Protocol for TTS provider implementations."""

    provider_id: str

    def validate(self, request: SynthesisRequest) -> None:
        """Raise when a request lacks fields this provider requires."""

    def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Synthesize one audio clip for a validated request."""


class CloudNeuralProvider:
    """Google Cloud Neural2/Studio provider driven by gender and style selectors."""

    provider_id = "google"

    def __init__(
        self,
        client: GoogleSpeechClient | None = None,
        language_code: str = "en-US",
        strict_voice_styles: bool = False,
    ) -> None:
        """Initialize cloud provider settings."""

        self.client = client or GoogleSpeechClient()
        self.language_code = language_code
        self.strict_voice_styles = strict_voice_styles

    def validate(self, request: SynthesisRequest) -> None:
        """Check gender/style support; only fails in strict mode."""

        # Lenient resolution cannot fail; synthesize warns about normalized values.
        if self.strict_voice_styles:
            resolve_voice_selection(request.gender, request.style, strict=True)

    def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Synthesize MP3 audio from an SSML-wrapped request."""

        voice_name, style_config = resolve_voice_selection(
            request.gender,
            request.style,
            strict=self.strict_voice_styles,
        )
        ssml = wrap_markup(request.text, style_config)
        pitch = clamp(float_or_default(request.pitch, 0.0), *PITCH_RANGE)
        speaking_rate = clamp(float_or_default(request.speed, 1.0), *SPEAKING_RATE_RANGE)

        # Volume is playback-side only; gain stays at the native 0 dB level.
        volume = parse_optional_float(request.volume)
        if volume is not None:
            logger.debug("Ignoring client volume {} for cloud synthesis.", volume)

        audio_bytes = self.client.synthesize_ssml(
            ssml=ssml,
            voice_name=voice_name,
            language_code=self.language_code,
            pitch=pitch,
            speaking_rate=speaking_rate,
            volume_gain_db=0.0,
        )
        return SynthesisResult(
            audio_bytes=audio_bytes,
            content_type=MPEG_CONTENT_TYPE,
            voice_id=voice_name,
        )


class RemoteApiProvider:
    """ElevenLabs provider driven by explicit voice and model identifiers."""

    provider_id = "elevenlabs"

    def __init__(self, client: ElevenLabsClient) -> None:
        """Initialize remote provider settings."""

        self.client = client

    def validate(self, request: SynthesisRequest) -> None:
        """Require voice and model selectors."""

        if normalize_optional_string(request.voice_id) is None:
            raise ValidationError("Voice ID is required.")
        if normalize_optional_string(request.model_id) is None:
            raise ValidationError("Model ID is required.")

    def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Synthesize MPEG audio with voice settings and optional language override."""

        voice_id = normalize_optional_string(request.voice_id) or ""
        model_id = normalize_optional_string(request.model_id) or ""
        audio_bytes = self.client.synthesize_speech(
            voice_id=voice_id,
            text=request.text,
            model_id=model_id,
            voice_settings=self.voice_settings(request),
            language_id=normalize_optional_string(request.language_override),
        )
        return SynthesisResult(
            audio_bytes=audio_bytes,
            content_type=MPEG_CONTENT_TYPE,
            voice_id=voice_id,
            model_id=model_id,
        )

    @staticmethod
    def voice_settings(request: SynthesisRequest) -> dict[str, float | bool]:
        """Return the `voice_settings` block with defaults for unusable values."""

        return {
            "stability": float_or_default(request.stability, DEFAULT_STABILITY),
            "similarity_boost": float_or_default(request.similarity, DEFAULT_SIMILARITY_BOOST),
            "style": float_or_default(request.style_exaggeration, DEFAULT_STYLE_EXAGGERATION),
            "use_speaker_boost": True,
        }
