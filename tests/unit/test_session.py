"""Unit tests for studio session reducers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from voicestudio.catalog import MODEL_CATALOG
from voicestudio.models.datatypes import SynthesisResult, VoiceCatalogEntry
from voicestudio.session import (
    PRESETS,
    StudioState,
    add_history,
    build_preview_request,
    build_request,
    filter_voices,
    finish_preview,
    history_item_from_result,
    select_model,
    select_voice,
    set_language_override,
    set_slider,
    toggle_preview,
    with_models,
    with_voices,
)

_VOICES = [
    VoiceCatalogEntry(
        id="voice-rachel",
        name="Rachel",
        description="American, en",
        category="premade",
        language="en",
    ),
    VoiceCatalogEntry(
        id="voice-george",
        name="George",
        description="British",
        category="premade",
        language="British",
    ),
]


def _loaded_state() -> StudioState:
    """Build a state with the fixed models and test voices loaded."""

    return with_voices(with_models(StudioState(), list(MODEL_CATALOG)), _VOICES)


def test_loading_catalogs_selects_defaults() -> None:
    """Loading should select the first voice and keep the default model."""

    state = _loaded_state()

    assert state.selected_voice_id == "voice-rachel"
    assert state.selected_model_id == "eleven_multilingual_v2"
    assert state.selected_model is not None and state.selected_model.badge == "V2"


def test_loading_models_without_default_selects_first() -> None:
    """When the default model is missing, the first listed model is selected."""

    state = with_models(StudioState(), list(MODEL_CATALOG[1:]))

    assert state.selected_model_id == "eleven_turbo_v2"


def test_reducers_do_not_mutate_previous_state() -> None:
    """Every reducer should return a new state and leave the input untouched."""

    original = _loaded_state()
    updated = select_voice(original, "voice-george")
    updated = set_slider(updated, "stability", 0.9)

    assert original.selected_voice_id == "voice-rachel"
    assert original.sliders.stability == 0.5
    assert updated.selected_voice_id == "voice-george"
    assert updated.sliders.stability == 0.9


def test_select_unknown_ids_raise_key_error() -> None:
    """Selecting identifiers outside the catalog should fail."""

    state = _loaded_state()

    with pytest.raises(KeyError):
        select_voice(state, "missing")
    with pytest.raises(KeyError):
        select_model(state, "missing")
    with pytest.raises(KeyError):
        set_slider(state, "volume", 1.0)  # type: ignore[arg-type]


def test_preview_toggle_and_finish() -> None:
    """Toggling the same voice twice should stop its preview."""

    state = toggle_preview(_loaded_state(), "voice-george")
    assert state.previewing_voice_id == "voice-george"
    assert toggle_preview(state, "voice-george").previewing_voice_id is None
    assert toggle_preview(state, "voice-rachel").previewing_voice_id == "voice-rachel"
    assert finish_preview(state).previewing_voice_id is None


def test_filter_voices_is_case_insensitive() -> None:
    """Voice search should match names case-insensitively."""

    state = _loaded_state()

    assert [voice.id for voice in filter_voices(state, "geo")] == ["voice-george"]
    assert len(filter_voices(state)) == 2


def test_build_request_uses_selection_and_sliders() -> None:
    """Requests should carry the selection, slider values, and language override."""

    state = set_language_override(set_slider(_loaded_state(), "speed", 1.2), "fr")

    request = build_request(state, "  Bonjour  ")

    assert request.text == "Bonjour"
    assert request.voice_id == "voice-rachel"
    assert request.model_id == "eleven_multilingual_v2"
    assert request.speed == 1.2
    assert request.similarity == 0.75
    assert request.language_override == "fr"
    assert set_language_override(state, "").language_override is None


def test_build_preview_request_uses_default_settings() -> None:
    """Preview requests should introduce the voice with default settings."""

    state = set_slider(_loaded_state(), "stability", 0.1)

    request = build_preview_request(state, _VOICES[1])

    assert request.text == "Hello, I am George. This is a preview."
    assert request.voice_id == "voice-george"
    assert request.stability == 0.5


def test_history_is_newest_first_with_snippets() -> None:
    """History items should truncate long text and be prepended."""

    state = set_slider(_loaded_state(), "speed", 1.5)
    created_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    result = SynthesisResult(audio_bytes=b"x", created_at=created_at, voice_id="voice-rachel")

    first = history_item_from_result(state, PRESETS["story"], result, audio_handle="a.mp3")
    state = add_history(state, first)
    second = history_item_from_result(state, "Short", result, audio_handle="b.mp3")
    state = add_history(state, second)

    assert [item.id for item in state.history] == [2, 1]
    assert first.text_snippet == PRESETS["story"][:60] + "..."
    assert second.text_snippet == "Short"
    assert first.voice_label == "Rachel"
    assert first.model_label == "V2"
    assert first.playback_rate == 1.5
    assert first.created_at == created_at
