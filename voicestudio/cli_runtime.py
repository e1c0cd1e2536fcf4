"""CLI runtime resolution helpers.

This module isolates config loading, runtime source assembly, and secure
API-key handling from the command wiring layer.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Protocol

import typer

from .config import ConfigLoader, RuntimeConfigSources, StudioConfig
from .credentials import create_credential_store
from .errors import CommandError
from .parsing import normalize_optional_string


class CredentialStoreProtocol(Protocol):
    """Protocol for secure credential store operations used by CLI runtime resolution."""

    def get_api_key(self) -> str | None:
        """Return currently stored API key, if available."""


def load_command_config(config_path: Path | None) -> StudioConfig:
    """Load YAML config when requested, else environment config, mapping failures."""

    try:
        if config_path is None:
            return ConfigLoader.from_env()
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise CommandError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        source = f"config file `{config_path}`" if config_path is not None else "environment"
        raise CommandError(
            stage="config",
            detail=f"Invalid {source}: {exc}",
            hint="Fix config values and rerun.",
        ) from exc
    except Exception as exc:
        raise CommandError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def resolve_runtime_sources(
    api_key: str | None,
    prompt_api_key: bool,
    credential_store_factory: Callable[[], CredentialStoreProtocol] | None = None,
) -> RuntimeConfigSources:
    """Resolve CLI, secure, and env runtime source mappings for the API key."""

    store_factory = credential_store_factory or create_credential_store

    runtime_cli_values: dict[str, str] = {}
    normalized_api_key = normalize_optional_string(api_key)
    if normalized_api_key is None and prompt_api_key:
        normalized_api_key = normalize_optional_string(
            typer.prompt(
                "ElevenLabs API key (hidden; leave blank to skip)",
                default="",
                hide_input=True,
                show_default=False,
            )
        )
    if normalized_api_key is not None:
        runtime_cli_values["api_key"] = normalized_api_key

    runtime_secure_values: dict[str, str] = {}
    stored_api_key = store_factory().get_api_key()
    if stored_api_key is not None:
        runtime_secure_values["api_key"] = stored_api_key

    runtime_env_values: dict[str, str] = {}
    env_api_key = normalize_optional_string(os.environ.get("ELEVENLABS_API_KEY"))
    if env_api_key is not None:
        runtime_env_values["ELEVENLABS_API_KEY"] = env_api_key

    return RuntimeConfigSources(
        cli=runtime_cli_values,
        secure=runtime_secure_values,
        env=runtime_env_values,
    )
