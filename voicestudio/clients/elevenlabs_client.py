"""ElevenLabs HTTP client utilities for speech synthesis and voice listing.

Responsibilities:
- Send minimal speech and voice-catalog requests to the ElevenLabs REST API.
- Raise actionable provider exceptions with sanitized, client-safe messages.
"""

from __future__ import annotations

import json
import re
import socket
from typing import Any

import requests

from ..errors import ProviderError


DEFAULT_BASE_URL = "https://api.elevenlabs.io/v1"


class ElevenLabsClient:
    """Minimal requests-based ElevenLabs HTTP client."""

    _MAX_PROVIDER_MESSAGE_CHARS = 180

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialize ElevenLabs HTTP client settings."""

        self.api_key = api_key.strip() if isinstance(api_key, str) else ""
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _require_api_key(self) -> None:
        """Require API key presence before issuing ElevenLabs requests."""

        if not self.api_key:
            raise ProviderError(
                "Missing ElevenLabs API key. Set `ELEVENLABS_API_KEY` or run "
                "`voicestudio credentials --set-api-key`.",
                failure_kind="invalid_api_key",
            )

    def _headers(self, accept: str) -> dict[str, str]:
        return {
            "Accept": accept,
            "xi-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def synthesize_speech(
        self,
        *,
        voice_id: str,
        text: str,
        model_id: str,
        voice_settings: dict[str, Any],
        language_id: str | None = None,
    ) -> bytes:
        """Return MPEG audio bytes from `POST /text-to-speech/{voice_id}`."""

        self._require_api_key()

        payload: dict[str, Any] = {
            "text": text,
            "model_id": model_id,
            "voice_settings": voice_settings,
        }
        if language_id:
            payload["language_id"] = language_id

        response_bytes = self._execute(
            "post",
            endpoint_path=f"/text-to-speech/{voice_id}",
            accept="audio/mpeg",
            payload=payload,
        )
        if not response_bytes:
            raise ProviderError("ElevenLabs speech response is empty.")
        return response_bytes

    def list_voices(self) -> list[dict[str, Any]]:
        """Return raw voice records from `GET /voices`."""

        self._require_api_key()

        raw_payload = self._execute("get", endpoint_path="/voices", accept="application/json")
        try:
            payload = json.loads(raw_payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProviderError("ElevenLabs returned invalid JSON payload.") from exc

        voices = payload.get("voices") if isinstance(payload, dict) else None
        if not isinstance(voices, list):
            raise ProviderError("ElevenLabs response missing `voices` list.")
        return [voice for voice in voices if isinstance(voice, dict)]

    def _execute(
        self,
        method: str,
        *,
        endpoint_path: str,
        accept: str,
        payload: dict[str, Any] | None = None,
    ) -> bytes:
        """Execute one ElevenLabs request and map failures consistently."""

        endpoint = f"{self.base_url}{endpoint_path}"
        try:
            response = requests.request(
                method.upper(),
                endpoint,
                headers=self._headers(accept),
                json=payload,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return bytes(response.content)
        except requests.HTTPError as exc:
            raise self._http_error_to_provider_error(exc) from exc
        except requests.RequestException as exc:
            failure_kind = self._classify_transport_failure(exc)
            if failure_kind == "timeout":
                detail = "ElevenLabs request timed out."
            else:
                detail = (
                    "ElevenLabs request transport error: "
                    f"{self._short_message(self._redact_sensitive_tokens(str(exc)))}"
                )
            raise ProviderError(detail, failure_kind=failure_kind) from exc
        except TimeoutError as exc:
            raise ProviderError("ElevenLabs request timed out.", failure_kind="timeout") from exc

    @staticmethod
    def _decode_error_body(exc: requests.HTTPError) -> str:
        """Decode an HTTP error body into a best-effort UTF-8 payload string."""

        response = exc.response
        if response is None:
            return ""
        return bytes(response.content or b"").decode("utf-8", errors="replace").strip()

    @classmethod
    def _redact_sensitive_tokens(cls, text: str) -> str:
        """Redact API-key-like tokens from provider error content."""

        redacted = re.sub(r"\bsk_[A-Za-z0-9]{16,}\b", "[redacted-key]", text)
        redacted = re.sub(
            r"(?i)xi-api-key[\"':=\s]+[A-Za-z0-9_-]{12,}",
            "xi-api-key=[redacted-key]",
            redacted,
        )
        return redacted

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap user-facing provider message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_PROVIDER_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_PROVIDER_MESSAGE_CHARS - 1]}..."

    @classmethod
    def _extract_provider_message(cls, body: str) -> tuple[str, str | None]:
        """Extract a concise provider message and optional provider status code.

        ElevenLabs reports errors as `{"detail": {"status": ..., "message": ...}}`,
        `{"detail": "..."}`, or occasionally `{"error": {"message": ...}}`.
        """

        if not body:
            return "", None

        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            return "", None

        provider_code: str | None = None
        message: str | None = None
        if isinstance(payload, dict):
            detail = payload.get("detail")
            if isinstance(detail, dict):
                status_value = detail.get("status") or detail.get("code")
                if isinstance(status_value, str) and status_value.strip():
                    provider_code = status_value.strip()
                message_value = detail.get("message")
                if isinstance(message_value, str) and message_value.strip():
                    message = message_value.strip()
            elif isinstance(detail, str) and detail.strip():
                message = detail.strip()

            error_payload = payload.get("error")
            if message is None and isinstance(error_payload, dict):
                message_value = error_payload.get("message")
                if isinstance(message_value, str) and message_value.strip():
                    message = message_value.strip()

        if message is None:
            return "", provider_code
        return cls._short_message(cls._redact_sensitive_tokens(message)), provider_code

    @staticmethod
    def _classify_http_failure(
        status_code: int,
        provider_message: str,
        provider_code: str | None,
    ) -> str:
        """Classify ElevenLabs HTTP errors into deterministic diagnostic kinds."""

        message_lower = provider_message.lower()
        normalized_code = provider_code.lower() if provider_code is not None else ""

        if status_code == 401 or normalized_code == "invalid_api_key" or "api key" in message_lower:
            return "invalid_api_key"
        if normalized_code == "quota_exceeded" or "quota" in message_lower:
            return "insufficient_quota"
        if normalized_code == "voice_not_found" or (
            status_code in {400, 404} and "voice" in message_lower
        ):
            return "invalid_voice"
        if status_code in {408, 504} or "timed out" in message_lower:
            return "timeout"
        return "http_error"

    @staticmethod
    def _classify_transport_failure(reason: object) -> str:
        """Classify network-layer failures into deterministic diagnostic kinds."""

        if isinstance(reason, TimeoutError | socket.timeout | requests.Timeout):
            return "timeout"
        return "transport"

    @classmethod
    def _http_error_to_provider_error(cls, exc: requests.HTTPError) -> ProviderError:
        """Convert HTTP errors into normalized provider exceptions with metadata."""

        status_code = exc.response.status_code if exc.response is not None else 0
        body = cls._decode_error_body(exc)
        provider_message, provider_code = cls._extract_provider_message(body)
        failure_kind = cls._classify_http_failure(status_code, provider_message, provider_code)

        if provider_message:
            detail = provider_message
        else:
            detail = {
                "invalid_api_key": "ElevenLabs authentication failed. Check the API key.",
                "insufficient_quota": "ElevenLabs quota is insufficient for this request.",
                "timeout": "ElevenLabs request timed out.",
            }.get(failure_kind, "Failed to generate audio. Check API Key or Quota.")

        return ProviderError(
            detail,
            failure_kind=failure_kind,
            status_code=status_code,
            provider_code=provider_code,
        )
