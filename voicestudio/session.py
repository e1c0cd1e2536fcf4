"""Studio session state for catalog-driven synthesis clients.

Responsibilities:
- Hold selection, slider, preview, and history state in one immutable object.
- Provide pure reducer-style functions that return updated state copies.
- Build gateway requests and history items from the current state.

Key types:
- `StudioState`: immutable client state snapshot.
- `SliderSettings`: voice setting slider values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

from .catalog import DEFAULT_MODEL_ID
from .models.datatypes import (
    HistoryItem,
    ModelCatalogEntry,
    SynthesisRequest,
    SynthesisResult,
    VoiceCatalogEntry,
)


SNIPPET_CHARS = 60

SliderName = Literal["speed", "stability", "similarity", "style_exaggeration"]

PRESETS: dict[str, str] = {
    "story": (
        "Once upon a time, in a kingdom far away, there lived a brave little mouse "
        "who dreamed of flying."
    ),
    "joke": "Why did the scarecrow win an award? Because he was outstanding in his field!",
    "ad": (
        "Are you tired of slow internet? Switch to BoltFiber today for lightning fast "
        "speeds and reliability you can trust."
    ),
    "lang": "Bonjour! Je m'appelle Claude. Hallo! Ich heiße Hans. ¡Hola! Me llamo Maria.",
    "drama": (
        "Don't you dare walk away from me! I am telling you the truth, whether you want "
        "to hear it or not!"
    ),
    "game": "Target acquired. Initiating launch sequence in 3, 2, 1... Blast off!",
    "podcast": (
        "Welcome back to 'The Daily Grind', the podcast where we explore productivity "
        "hacks for busy entrepreneurs."
    ),
    "meditation": (
        "Take a deep breath in... hold it for a moment... and slowly exhale. Feel the "
        "tension leaving your body."
    ),
}


@dataclass(frozen=True, slots=True)
class SliderSettings:
    """Voice setting slider values sent with each generation."""

    speed: float = 1.0
    stability: float = 0.5
    similarity: float = 0.75
    style_exaggeration: float = 0.0


@dataclass(frozen=True, slots=True)
class StudioState:
    """Immutable snapshot of one studio session.

    Attributes:
        voices: Voice catalog loaded for the session.
        models: Model catalog loaded for the session.
        selected_voice_id: Currently selected voice, if any.
        selected_model_id: Currently selected model.
        sliders: Current voice setting values.
        language_override: Explicit language code, or `None` for auto-detect.
        history: Generated clips, newest first.
        previewing_voice_id: Voice whose preview is playing, if any.
    """

    voices: tuple[VoiceCatalogEntry, ...] = ()
    models: tuple[ModelCatalogEntry, ...] = ()
    selected_voice_id: str | None = None
    selected_model_id: str = DEFAULT_MODEL_ID
    sliders: SliderSettings = field(default_factory=SliderSettings)
    language_override: str | None = None
    history: tuple[HistoryItem, ...] = ()
    previewing_voice_id: str | None = None

    @property
    def selected_voice(self) -> VoiceCatalogEntry | None:
        return next((voice for voice in self.voices if voice.id == self.selected_voice_id), None)

    @property
    def selected_model(self) -> ModelCatalogEntry | None:
        return next((model for model in self.models if model.id == self.selected_model_id), None)


def with_voices(state: StudioState, voices: list[VoiceCatalogEntry]) -> StudioState:
    """Load voices, selecting the first one when nothing valid is selected."""

    loaded = tuple(voices)
    selected = state.selected_voice_id
    if not any(voice.id == selected for voice in loaded):
        selected = loaded[0].id if loaded else None
    return replace(state, voices=loaded, selected_voice_id=selected)


def with_models(state: StudioState, models: list[ModelCatalogEntry]) -> StudioState:
    """Load models, keeping the selected model when listed, else the first."""

    loaded = tuple(models)
    selected = state.selected_model_id
    if loaded and not any(model.id == selected for model in loaded):
        selected = loaded[0].id
    return replace(state, models=loaded, selected_model_id=selected)


def select_voice(state: StudioState, voice_id: str) -> StudioState:
    """Select a voice from the loaded catalog.

    Raises:
        KeyError: If the voice is not in the catalog.
    """

    if not any(voice.id == voice_id for voice in state.voices):
        raise KeyError(voice_id)
    return replace(state, selected_voice_id=voice_id)


def select_model(state: StudioState, model_id: str) -> StudioState:
    """Select a model from the loaded catalog.

    Raises:
        KeyError: If the model is not in the catalog.
    """

    if not any(model.id == model_id for model in state.models):
        raise KeyError(model_id)
    return replace(state, selected_model_id=model_id)


def set_slider(state: StudioState, name: SliderName, value: float) -> StudioState:
    """Set one slider value."""

    if name not in SliderSettings.__dataclass_fields__:
        raise KeyError(name)
    return replace(state, sliders=replace(state.sliders, **{name: float(value)}))


def set_language_override(state: StudioState, language: str | None) -> StudioState:
    return replace(state, language_override=language or None)


def toggle_preview(state: StudioState, voice_id: str) -> StudioState:
    """Start previewing a voice, or stop when it is already previewing."""

    if state.previewing_voice_id == voice_id:
        return replace(state, previewing_voice_id=None)
    return replace(state, previewing_voice_id=voice_id)


def finish_preview(state: StudioState) -> StudioState:
    return replace(state, previewing_voice_id=None)


def add_history(state: StudioState, item: HistoryItem) -> StudioState:
    """Prepend a history item so the newest clip comes first."""

    return replace(state, history=(item, *state.history))


def filter_voices(state: StudioState, query: str = "") -> list[VoiceCatalogEntry]:
    """Return voices whose name contains the query, case-insensitively."""

    needle = query.strip().lower()
    return [voice for voice in state.voices if needle in voice.name.lower()]


def text_snippet(text: str) -> str:
    if len(text) > SNIPPET_CHARS:
        return f"{text[:SNIPPET_CHARS]}..."
    return text


def preview_text(voice: VoiceCatalogEntry) -> str:
    return f"Hello, I am {voice.name}. This is a preview."


def build_request(state: StudioState, text: str) -> SynthesisRequest:
    """Build a remote API synthesis request from the current selection and sliders."""

    return SynthesisRequest(
        text=text.strip(),
        voice_id=state.selected_voice_id,
        model_id=state.selected_model_id,
        speed=state.sliders.speed,
        stability=state.sliders.stability,
        similarity=state.sliders.similarity,
        style_exaggeration=state.sliders.style_exaggeration,
        language_override=state.language_override,
    )


def build_preview_request(state: StudioState, voice: VoiceCatalogEntry) -> SynthesisRequest:
    """Build a preview request using default voice settings."""

    defaults = SliderSettings()
    return SynthesisRequest(
        text=preview_text(voice),
        voice_id=voice.id,
        model_id=state.selected_model_id,
        speed=defaults.speed,
        stability=defaults.stability,
        similarity=defaults.similarity,
        style_exaggeration=defaults.style_exaggeration,
    )


def history_item_from_result(
    state: StudioState,
    text: str,
    result: SynthesisResult,
    audio_handle: str,
) -> HistoryItem:
    """Create a history item describing a successful generation."""

    voice = state.selected_voice
    model = state.selected_model
    next_id = max((item.id for item in state.history), default=0) + 1
    return HistoryItem(
        id=next_id,
        text_snippet=text_snippet(text.strip()),
        voice_label=voice.name if voice is not None else (result.voice_id or "Unknown"),
        model_label=model.badge if model is not None else "V2",
        created_at=result.created_at,
        audio_handle=audio_handle,
        playback_rate=state.sliders.speed,
    )
