"""Configuration model and loaders for Voice Studio.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Resolve the provider API key with deterministic source precedence.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `StudioConfig`: normalized runtime settings for one server process.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `StudioConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .clients.elevenlabs_client import DEFAULT_BASE_URL
from .gateway import DEFAULT_MAX_TEXT_CHARS
from .parsing import normalize_optional_string, parse_required_boolean


SUPPORTED_PROVIDER_IDS = ("elevenlabs", "google")
_DEFAULT_HOST = "127.0.0.1"
_DEFAULT_PORT = 3000
_DEFAULT_LANGUAGE_CODE = "en-US"
_DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic runtime value precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments.
        secure: Values loaded from secure local credential storage.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    secure: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class StudioConfig:
    """Runtime configuration for one Voice Studio process.

    Attributes:
        host: Interface the HTTP server binds to.
        port: TCP port the HTTP server listens on.
        providers: Enabled provider identifiers; each enables its endpoint.
        max_text_chars: Upper bound on synthesis text length.
        language_code: BCP-47 language code for cloud neural voices.
        elevenlabs_base_url: ElevenLabs REST API base URL.
        request_timeout_seconds: Timeout for one outbound provider call.
        strict_voice_styles: Reject unknown gender/style values instead of normalizing.
        api_key: Optional ElevenLabs API key.
        runtime_sources: Optional runtime source overrides injected by the CLI.
    """

    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    providers: tuple[str, ...] = SUPPORTED_PROVIDER_IDS
    max_text_chars: int = DEFAULT_MAX_TEXT_CHARS
    language_code: str = _DEFAULT_LANGUAGE_CODE
    elevenlabs_base_url: str = DEFAULT_BASE_URL
    request_timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    strict_voice_styles: bool = False
    api_key: str | None = None
    runtime_sources: RuntimeConfigSources = field(default_factory=RuntimeConfigSources)

    def validate(self) -> None:
        """Validate configuration values before the application is built."""

        if not self.providers:
            raise ValueError("`providers` must list at least one provider.")
        for provider_id in self.providers:
            if provider_id not in SUPPORTED_PROVIDER_IDS:
                supported = ", ".join(SUPPORTED_PROVIDER_IDS)
                raise ValueError(
                    f"Unsupported provider `{provider_id}`; supported: {supported}."
                )
        if not 0 < self.port < 65536:
            raise ValueError("`port` must be between 1 and 65535.")
        if self.max_text_chars <= 0:
            raise ValueError("`max_text_chars` must be a positive integer.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("`request_timeout_seconds` must be positive.")
        if normalize_optional_string(self.language_code) is None:
            raise ValueError("`language_code` must be a non-empty string.")

    def provider_enabled(self, provider_id: str) -> bool:
        return provider_id in self.providers

    def resolved_api_key(self, sources: RuntimeConfigSources | None = None) -> str | None:
        """Resolve the ElevenLabs API key.

        Precedence is `cli` > `secure` > `env` > config field.
        """

        resolved_sources = sources if sources is not None else self.runtime_sources
        for value in (
            self._normalized_lookup(resolved_sources.cli, "api_key"),
            self._normalized_lookup(resolved_sources.secure, "api_key"),
            self._normalized_lookup(resolved_sources.env, "ELEVENLABS_API_KEY"),
        ):
            if value is not None:
                return value
        return normalize_optional_string(self.api_key)

    @staticmethod
    def _normalized_lookup(mapping: Mapping[str, str], key: str) -> str | None:
        """Return a stripped mapping value for a key or `None` when missing/blank."""

        if key not in mapping:
            return None
        return normalize_optional_string(mapping.get(key))


class ConfigLoader:
    """Factory methods for creating `StudioConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "host",
            "port",
            "providers",
            "max_text_chars",
            "language_code",
            "elevenlabs_base_url",
            "request_timeout_seconds",
            "strict_voice_styles",
            "api_key",
        }
    )

    @staticmethod
    def from_yaml(path: Path, env: Mapping[str, str] | None = None) -> StudioConfig:
        """Create a validated config from a YAML file.

        Environment values still take part in API key resolution.
        """

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        unknown = sorted(set(payload) - ConfigLoader._SUPPORTED_YAML_KEYS)
        if unknown:
            raise ValueError(
                f"YAML config `{path}` has unsupported keys: {', '.join(unknown)}."
            )

        defaults = StudioConfig()
        config = StudioConfig(
            host=ConfigLoader._string(payload.get("host"), "host") or defaults.host,
            port=ConfigLoader._positive_int(payload.get("port"), "port") or defaults.port,
            providers=ConfigLoader._providers(payload.get("providers")) or defaults.providers,
            max_text_chars=(
                ConfigLoader._positive_int(payload.get("max_text_chars"), "max_text_chars")
                or defaults.max_text_chars
            ),
            language_code=(
                ConfigLoader._string(payload.get("language_code"), "language_code")
                or defaults.language_code
            ),
            elevenlabs_base_url=(
                ConfigLoader._string(payload.get("elevenlabs_base_url"), "elevenlabs_base_url")
                or defaults.elevenlabs_base_url
            ),
            request_timeout_seconds=(
                ConfigLoader._positive_float(
                    payload.get("request_timeout_seconds"), "request_timeout_seconds"
                )
                or defaults.request_timeout_seconds
            ),
            strict_voice_styles=ConfigLoader._boolean(
                payload.get("strict_voice_styles"), "strict_voice_styles", False
            ),
            api_key=ConfigLoader._string(payload.get("api_key"), "api_key"),
            runtime_sources=RuntimeConfigSources(env=ConfigLoader._runtime_env(env)),
        )
        config.validate()
        return config

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> StudioConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        defaults = StudioConfig()

        config = StudioConfig(
            host=normalize_optional_string(env_map.get("VOICESTUDIO_HOST")) or defaults.host,
            port=ConfigLoader._positive_int(env_map.get("PORT"), "PORT") or defaults.port,
            providers=(
                ConfigLoader._providers(env_map.get("VOICESTUDIO_PROVIDERS"))
                or defaults.providers
            ),
            max_text_chars=(
                ConfigLoader._positive_int(
                    env_map.get("VOICESTUDIO_MAX_TEXT_CHARS"), "VOICESTUDIO_MAX_TEXT_CHARS"
                )
                or defaults.max_text_chars
            ),
            language_code=(
                normalize_optional_string(env_map.get("VOICESTUDIO_LANGUAGE_CODE"))
                or defaults.language_code
            ),
            elevenlabs_base_url=(
                normalize_optional_string(env_map.get("ELEVENLABS_BASE_URL"))
                or defaults.elevenlabs_base_url
            ),
            request_timeout_seconds=(
                ConfigLoader._positive_float(
                    env_map.get("VOICESTUDIO_REQUEST_TIMEOUT"), "VOICESTUDIO_REQUEST_TIMEOUT"
                )
                or defaults.request_timeout_seconds
            ),
            strict_voice_styles=ConfigLoader._boolean(
                env_map.get("VOICESTUDIO_STRICT_VOICE_STYLES"),
                "VOICESTUDIO_STRICT_VOICE_STYLES",
                False,
            ),
            runtime_sources=RuntimeConfigSources(env=ConfigLoader._runtime_env(env_map)),
        )
        config.validate()
        return config

    @staticmethod
    def _runtime_env(env: Mapping[str, str] | None) -> dict[str, str]:
        """Return the environment subset that takes part in runtime resolution."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        value = normalize_optional_string(env_map.get("ELEVENLABS_API_KEY"))
        return {} if value is None else {"ELEVENLABS_API_KEY": value}

    @staticmethod
    def _string(value: object, field_name: str) -> str | None:
        if value is None:
            return None
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ValueError(f"`{field_name}` must be a string.")
        return normalize_optional_string(value)

    @staticmethod
    def _positive_int(value: object, field_name: str) -> int | None:
        """Parse an optional positive integer value."""

        if isinstance(value, bool):
            raise ValueError(f"`{field_name}` must be a positive integer.")
        text = normalize_optional_string(value)
        if text is None:
            return None
        try:
            parsed = int(text)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a positive integer.") from exc
        if parsed <= 0:
            raise ValueError(f"`{field_name}` must be a positive integer.")
        return parsed

    @staticmethod
    def _positive_float(value: object, field_name: str) -> float | None:
        """Parse an optional positive float value."""

        text = normalize_optional_string(value)
        if text is None:
            return None
        try:
            parsed = float(text)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a positive number.") from exc
        if parsed <= 0:
            raise ValueError(f"`{field_name}` must be a positive number.")
        return parsed

    @staticmethod
    def _boolean(value: object, field_name: str, default: bool) -> bool:
        if value is None:
            return default
        return parse_required_boolean(value, field_name)

    @staticmethod
    def _providers(value: Any) -> tuple[str, ...] | None:
        """Parse a provider list from a comma-separated string or YAML sequence."""

        if value is None:
            return None
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, (list, tuple)):
            items = [str(item) for item in value]
        else:
            raise ValueError("`providers` must be a list or comma-separated string.")
        normalized = tuple(
            token.lower()
            for token in (normalize_optional_string(item) for item in items)
            if token is not None
        )
        return normalized or None
