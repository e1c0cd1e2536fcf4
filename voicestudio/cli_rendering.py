"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
catalog listings, and generated clip summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import CommandError, StudioError
from .models.datatypes import HistoryItem, ModelCatalogEntry, VoiceCatalogEntry


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    elif isinstance(exc, StudioError):
        typer.secho(f"{command_name} failed: {exc.message}", fg=typer.colors.RED, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_voice_list(voices: list[VoiceCatalogEntry]) -> None:
    """Print one row per voice: id, name, language, and description."""

    if not voices:
        typer.echo("No voices available.")
        return
    for voice in voices:
        typer.echo(f"{voice.id}  {voice.name} [{voice.language}] - {voice.description}")


def echo_model_list(models: list[ModelCatalogEntry]) -> None:
    """Print one row per model with its badge."""

    for model in models:
        typer.echo(f"{model.id}  {model.label} ({model.badge}) - {model.description}")


def echo_history_item(item: HistoryItem) -> None:
    """Print the summary line of a generated clip."""

    typer.echo(
        f"{item.voice_label} • {item.model_label} • "
        f"{item.created_at.strftime('%H:%M:%S')}  {item.text_snippet}"
    )
    typer.echo(f"Audio: {item.audio_handle}")
