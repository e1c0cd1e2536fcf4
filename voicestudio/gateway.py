"""Synthesis gateway shared by every TTS endpoint.

Responsibilities:
- Validate text presence and length before any provider call.
- Delegate provider-specific validation and synthesis to one `TtsProvider`.
- Log request outcomes without leaking user text or secrets.
"""

from __future__ import annotations

from .errors import StudioError, ValidationError
from .models.datatypes import SynthesisRequest, SynthesisResult
from .telemetry.logger import RequestLogger
from .tts.synthesizer import TtsProvider


DEFAULT_MAX_TEXT_CHARS = 2000


class SynthesisGateway:
    """Validate requests and relay them to a single TTS provider."""

    def __init__(
        self,
        provider: TtsProvider,
        max_text_chars: int = DEFAULT_MAX_TEXT_CHARS,
        run_logger: RequestLogger | None = None,
    ) -> None:
        """Initialize the gateway for one provider and text bound."""

        if max_text_chars <= 0:
            raise ValueError("`max_text_chars` must be a positive integer.")
        self.provider = provider
        self.max_text_chars = max_text_chars
        self.run_logger = run_logger or RequestLogger()

    @property
    def route(self) -> str:
        return f"synthesize:{self.provider.provider_id}"

    def validate(self, request: SynthesisRequest) -> None:
        """Raise `ValidationError` or `ConfigurationError` for unusable requests."""

        if not isinstance(request.text, str) or not request.text.strip():
            raise ValidationError("Text is required")
        if len(request.text) > self.max_text_chars:
            raise ValidationError(f"Text exceeds {self.max_text_chars} characters.")
        self.provider.validate(request)

    def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Validate a request, synthesize it once, and return the result."""

        try:
            self.validate(request)
        except StudioError as exc:
            self.run_logger.log_request_rejected(self.route, reason=exc.message)
            raise

        self.run_logger.log_request_start(self.route, chars=len(request.text))
        try:
            result = self.provider.synthesize(request)
        except Exception as exc:
            self.run_logger.log_provider_failure(self.route, exc)
            raise
        self.run_logger.log_request_complete(
            self.route,
            bytes=len(result.audio_bytes),
            voice=result.voice_id or "none",
        )
        return result
