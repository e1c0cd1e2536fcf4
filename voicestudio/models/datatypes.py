"""Core datatypes shared across Voice Studio modules.

Responsibilities:
- Represent immutable records exchanged between the HTTP layer, the gateway,
  and the TTS providers.
- Render wire payloads with the camelCase keys expected by the browser UI.

Key types:
- `Gender`, `VoiceStyleConfig`, `SynthesisRequest`, `SynthesisResult`,
  `VoiceCatalogEntry`, `ModelCatalogEntry`, and `HistoryItem`.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Gender(str, Enum):
    """Supported voice genders for the cloud neural provider."""

    FEMALE = "FEMALE"
    MALE = "MALE"


@dataclass(frozen=True, slots=True)
class VoiceStyleConfig:
    """Markup and voice overrides for one `(gender, style)` pair.

    Attributes:
        markup_style: SSML `express-as` style name, or `None` for a bare wrapper.
        voice_override: Voice name replacing the gender default, when set.
    """

    markup_style: str | None = None
    voice_override: str | None = None


@dataclass(frozen=True, slots=True)
class SynthesisRequest:
    """One synthesis call as received from a client.

    Fields not used by the target provider stay `None`; numeric fields keep the
    raw client value so providers can apply their own defaults and ranges.
    """

    text: str
    voice_id: str | None = None
    model_id: str | None = None
    gender: str | None = None
    style: str | None = None
    speed: object = None
    pitch: object = None
    volume: object = None
    stability: object = None
    similarity: object = None
    style_exaggeration: object = None
    language_override: str | None = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class SynthesisResult:
    """Synthesized audio relayed back to the caller.

    Attributes:
        audio_bytes: Encoded audio payload returned by the provider.
        content_type: MIME type of `audio_bytes`.
        created_at: UTC timestamp of the synthesis.
        voice_id: Provider voice identifier used for synthesis.
        model_id: Provider model identifier, when the provider has one.
    """

    audio_bytes: bytes
    content_type: str = "audio/mpeg"
    created_at: datetime = field(default_factory=_utc_now)
    voice_id: str | None = None
    model_id: str | None = None

    def as_envelope(self) -> dict[str, Any]:
        """Return the base64 JSON envelope used by the remote-API endpoint."""

        return {
            "audio": base64.b64encode(self.audio_bytes).decode("ascii"),
            "contentType": self.content_type,
            "meta": {
                "voiceId": self.voice_id,
                "modelId": self.model_id,
                "createdAt": self.created_at.isoformat().replace("+00:00", "Z"),
            },
        }


@dataclass(frozen=True, slots=True)
class VoiceCatalogEntry:
    """Normalized descriptive record for one selectable voice."""

    id: str
    name: str
    description: str
    category: str
    language: str
    preview_url: str | None = None

    def as_payload(self) -> dict[str, Any]:
        """Return the JSON payload shape served by `/api/voices`."""

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "previewUrl": self.preview_url,
            "language": self.language,
        }


@dataclass(frozen=True, slots=True)
class ModelCatalogEntry:
    """Descriptive record for one selectable synthesis model."""

    id: str
    label: str
    description: str
    badge: str

    def as_payload(self) -> dict[str, str]:
        """Return the JSON payload shape served by `/api/models`."""

        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "badge": self.badge,
        }


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """One generated clip kept in the in-memory studio session history.

    Attributes:
        id: Monotonic item identifier.
        text_snippet: Short preview of the synthesized text.
        voice_label: Display name of the voice used.
        model_label: Badge of the model used.
        created_at: Generation timestamp.
        audio_handle: Opaque handle to the audio (data URL or file path).
        playback_rate: Playback rate chosen when the clip was generated.
    """

    id: int
    text_snippet: str
    voice_label: str
    model_label: str
    created_at: datetime
    audio_handle: str
    playback_rate: float = 1.0
