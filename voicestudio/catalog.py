"""Voice and model catalogs for populating client selectors.

Responsibilities:
- Fetch remote ElevenLabs voices and normalize their heterogeneous labels.
- Serve the fixed list of supported synthesis models.

Language resolution priority for a voice record is `labels.language`, then
`labels.accent`, then `DEFAULT_VOICE_LANGUAGE`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .clients.elevenlabs_client import ElevenLabsClient
from .models.datatypes import ModelCatalogEntry, VoiceCatalogEntry
from .parsing import normalize_optional_string
from .telemetry.logger import RequestLogger


DEFAULT_MODEL_ID = "eleven_multilingual_v2"
DEFAULT_VOICE_LANGUAGE = "English"
DEFAULT_VOICE_CATEGORY = "generated"
DEFAULT_VOICE_DESCRIPTION = "High quality neural voice"
LANGUAGE_LABEL_PRIORITY = ("language", "accent")

MODEL_CATALOG: tuple[ModelCatalogEntry, ...] = (
    ModelCatalogEntry(
        id="eleven_multilingual_v2",
        label="Eleven Multilingual v2",
        description="The most expressive Text to Speech",
        badge="V2",
    ),
    ModelCatalogEntry(
        id="eleven_turbo_v2",
        label="Eleven Turbo v2",
        description="Low latency, high quality",
        badge="Turbo",
    ),
    ModelCatalogEntry(
        id="eleven_turbo_v2_5",
        label="Eleven v2.5",
        description="Newest fast model",
        badge="V2.5",
    ),
)


def resolve_voice_language(labels: Mapping[str, Any]) -> str:
    """Pick the first non-blank label in `LANGUAGE_LABEL_PRIORITY` order."""

    for key in LANGUAGE_LABEL_PRIORITY:
        value = normalize_optional_string(labels.get(key))
        if value is not None:
            return value
    return DEFAULT_VOICE_LANGUAGE


def describe_voice_labels(labels: Mapping[str, Any]) -> str:
    """Join all non-blank label values into a single description string."""

    values = [
        text
        for text in (normalize_optional_string(value) for value in labels.values())
        if text is not None
    ]
    if not values:
        return DEFAULT_VOICE_DESCRIPTION
    return ", ".join(values)


def normalize_voice_record(record: Mapping[str, Any]) -> VoiceCatalogEntry | None:
    """Normalize one raw voice record, returning `None` when it has no identifier."""

    voice_id = normalize_optional_string(record.get("voice_id"))
    if voice_id is None:
        return None

    raw_labels = record.get("labels")
    labels: Mapping[str, Any] = raw_labels if isinstance(raw_labels, Mapping) else {}
    return VoiceCatalogEntry(
        id=voice_id,
        name=normalize_optional_string(record.get("name")) or voice_id,
        description=describe_voice_labels(labels),
        category=normalize_optional_string(record.get("category")) or DEFAULT_VOICE_CATEGORY,
        language=resolve_voice_language(labels),
        preview_url=normalize_optional_string(record.get("preview_url")),
    )


class CatalogProvider:
    """Serve remote voice listings and the fixed model list."""

    def __init__(
        self,
        client: ElevenLabsClient,
        models: tuple[ModelCatalogEntry, ...] = MODEL_CATALOG,
        run_logger: RequestLogger | None = None,
    ) -> None:
        self.client = client
        self.models = models
        self.run_logger = run_logger or RequestLogger()

    def list_voices(self) -> list[VoiceCatalogEntry]:
        """Fetch and normalize voices; provider failures propagate as `ProviderError`."""

        self.run_logger.log_request_start("catalog:voices")
        try:
            records = self.client.list_voices()
        except Exception as exc:
            self.run_logger.log_provider_failure("catalog:voices", exc)
            raise
        entries = [
            entry
            for entry in (normalize_voice_record(record) for record in records)
            if entry is not None
        ]
        skipped = len(records) - len(entries)
        if skipped:
            self.run_logger.log_warning("catalog:voices", "skipped", count=skipped)
        self.run_logger.log_request_complete("catalog:voices", count=len(entries))
        return entries

    def list_models(self) -> list[ModelCatalogEntry]:
        """Return the fixed model list."""

        return list(self.models)
