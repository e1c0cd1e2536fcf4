"""Voice and SSML style mapping for the cloud neural provider.

Responsibilities:
- Map `(gender, style)` pairs onto Google Cloud Neural2/Studio voice names.
- Build SSML utterances with escaped user text and optional `express-as` styles.

Unsupported genders and styles are normalized leniently by default: the gender
falls back to `FEMALE`, the style to an empty config, and a warning is logged.
Pass `strict=True` to raise `ConfigurationError` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.sax.saxutils import escape

from loguru import logger

from ..errors import ConfigurationError
from ..models.datatypes import Gender, VoiceStyleConfig
from ..parsing import normalize_optional_string


DEFAULT_GENDER = Gender.FEMALE
DEFAULT_STYLE = "neutral"

_MARKUP_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_EMPTY_CONFIG = VoiceStyleConfig()


@dataclass(frozen=True, slots=True)
class GenderVoices:
    """Default voice and style table for one gender."""

    default_voice: str
    styles: dict[str, VoiceStyleConfig] = field(default_factory=dict)


VOICE_MAP: dict[Gender, GenderVoices] = {
    Gender.FEMALE: GenderVoices(
        default_voice="en-US-Neural2-F",
        styles={
            "neutral": VoiceStyleConfig(),
            "friendly": VoiceStyleConfig(markup_style="cheerful"),
            "whisper": VoiceStyleConfig(markup_style="whisper"),
            "excited": VoiceStyleConfig(markup_style="excited"),
            "sad": VoiceStyleConfig(markup_style="sad"),
            "angry": VoiceStyleConfig(markup_style="angry"),
        },
    ),
    Gender.MALE: GenderVoices(
        default_voice="en-US-Neural2-D",
        styles={
            "neutral": VoiceStyleConfig(),
            "friendly": VoiceStyleConfig(markup_style="friendly"),
            "whisper": VoiceStyleConfig(markup_style="whisper"),
            "excited": VoiceStyleConfig(markup_style="excited"),
            "sad": VoiceStyleConfig(markup_style="sad"),
            "angry": VoiceStyleConfig(markup_style="angry"),
            "narrator": VoiceStyleConfig(voice_override="en-US-Studio-M"),
        },
    ),
}


def supported_styles(gender: Gender) -> tuple[str, ...]:
    """Return the style names configured for a gender in declaration order."""

    return tuple(VOICE_MAP[gender].styles)


def parse_gender(value: object, *, strict: bool = False) -> Gender:
    """Parse a gender token case-insensitively.

    Missing values resolve to `DEFAULT_GENDER`. Unknown values do too unless
    `strict` is set, in which case `ConfigurationError` is raised.
    """

    token = normalize_optional_string(value)
    if token is None:
        return DEFAULT_GENDER
    try:
        return Gender(token.upper())
    except ValueError:
        if strict:
            supported = ", ".join(member.value for member in Gender)
            raise ConfigurationError(
                f"Unsupported gender `{token}`; supported: {supported}."
            ) from None
        logger.warning("Unsupported gender {!r}; using {}.", token, DEFAULT_GENDER.value)
        return DEFAULT_GENDER


def resolve_style_config(
    gender: object,
    style: object,
    *,
    strict: bool = False,
) -> VoiceStyleConfig:
    """Return the style config for a pair, normalizing unsupported values."""

    return _style_for(parse_gender(gender, strict=strict), style, strict=strict)


def _style_for(resolved_gender: Gender, style: object, *, strict: bool) -> VoiceStyleConfig:
    style_name = (normalize_optional_string(style) or DEFAULT_STYLE).lower()
    config = VOICE_MAP[resolved_gender].styles.get(style_name)
    if config is not None:
        return config
    if strict:
        supported = ", ".join(supported_styles(resolved_gender))
        raise ConfigurationError(
            f"Unsupported style `{style_name}` for {resolved_gender.value}; "
            f"supported: {supported}."
        )
    logger.warning(
        "Unsupported style {!r} for {}; using the default voice without markup.",
        style_name,
        resolved_gender.value,
    )
    return _EMPTY_CONFIG


def resolve_voice_selection(
    gender: object,
    style: object,
    *,
    strict: bool = False,
) -> tuple[str, VoiceStyleConfig]:
    """Resolve a pair once, returning the voice name and its style config."""

    resolved_gender = parse_gender(gender, strict=strict)
    config = _style_for(resolved_gender, style, strict=strict)
    return config.voice_override or VOICE_MAP[resolved_gender].default_voice, config


def resolve_voice(gender: object, style: object, *, strict: bool = False) -> str:
    """Return the style override voice when present, else the gender default."""

    voice_name, _ = resolve_voice_selection(gender, style, strict=strict)
    return voice_name


def escape_markup(text: str) -> str:
    """Escape the five reserved XML characters."""

    return escape(text, _MARKUP_ENTITIES)


def wrap_markup(text: str, config: VoiceStyleConfig) -> str:
    """Wrap escaped text in `<speak>` with the config's optional `express-as` style."""

    escaped_text = escape_markup(text)
    if config.markup_style:
        return (
            f'<speak><express-as style="{config.markup_style}">'
            f"{escaped_text}</express-as></speak>"
        )
    return f"<speak>{escaped_text}</speak>"


def build_markup(text: str, gender: object, style: object, *, strict: bool = False) -> str:
    return wrap_markup(text, resolve_style_config(gender, style, strict=strict))
