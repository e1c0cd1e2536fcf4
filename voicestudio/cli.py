"""Command-line interface for Voice Studio.

Responsibilities:
- Run the HTTP service.
- List catalogs and synthesize clips to local files without the browser UI.
- Manage the securely stored ElevenLabs API key.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_history_item,
    echo_model_list,
    echo_voice_list,
    exit_with_command_error,
)
from .cli_runtime import load_command_config, resolve_runtime_sources
from .credentials import create_credential_store
from .errors import CommandError
from .models.datatypes import SynthesisRequest
from .parsing import normalize_optional_string
from .session import (
    PRESETS,
    StudioState,
    add_history,
    build_request,
    history_item_from_result,
    select_model,
    select_voice,
    set_language_override,
    set_slider,
    with_models,
    with_voices,
)
from .telemetry.logger import configure_logging
from .web.app import build_services, create_app

app = typer.Typer(
    name="voicestudio",
    no_args_is_help=True,
    help="Voice Studio CLI.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Optional YAML config file."),
]
ApiKeyOption = Annotated[
    str | None,
    typer.Option("--api-key", help="ElevenLabs API key for this run only."),
]
PromptApiKeyOption = Annotated[
    bool,
    typer.Option("--prompt-api-key", help="Prompt for the ElevenLabs API key with hidden input."),
]


def _write_audio(out: Path, audio_bytes: bytes) -> None:
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(audio_bytes)
    except OSError as exc:
        raise CommandError(
            stage="output",
            detail=f"Failed to write audio to `{out}`: {exc}",
            hint="Choose a writable output path via `--out`.",
        ) from exc


def _resolve_text(text: str | None, preset: str | None) -> str:
    """Return explicit text or a named preset."""

    if preset is not None:
        if preset not in PRESETS:
            raise CommandError(
                stage="input",
                detail=f"Unknown preset `{preset}`.",
                hint=f"Choose one of: {', '.join(sorted(PRESETS))}.",
            )
        return PRESETS[preset]
    return text or ""


@app.command("serve")
def serve_command(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Listen port.")] = None,
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging.")] = False,
) -> None:
    """Run the Voice Studio HTTP service."""

    try:
        studio_config = load_command_config(config)
        if host is not None:
            studio_config.host = host
        if port is not None:
            studio_config.port = port
        studio_config.validate()
        sources = resolve_runtime_sources(api_key, prompt_api_key=False)
        configure_logging(level="DEBUG" if debug else "INFO")
        web_app = create_app(studio_config, sources=sources)
    except Exception as exc:
        exit_with_command_error("serve", exc)

    typer.echo(
        f"Voice Studio running at http://{studio_config.host}:{studio_config.port}"
    )
    web_app.run(host=studio_config.host, port=studio_config.port, debug=debug)


@app.command("voices")
def voices_command(
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    prompt_api_key: PromptApiKeyOption = False,
) -> None:
    """List voices available to the configured ElevenLabs account."""

    try:
        studio_config = load_command_config(config)
        sources = resolve_runtime_sources(api_key, prompt_api_key)
        services = build_services(studio_config, sources=sources)
        voices = services.catalog.list_voices()
    except Exception as exc:
        exit_with_command_error("voices", exc)

    echo_voice_list(voices)


@app.command("models")
def models_command(config: ConfigOption = None) -> None:
    """List supported synthesis models."""

    try:
        studio_config = load_command_config(config)
        services = build_services(studio_config, sources=resolve_runtime_sources(None, False))
    except Exception as exc:
        exit_with_command_error("models", exc)

    echo_model_list(services.catalog.list_models())


@app.command("generate")
def generate_command(
    out: Annotated[Path, typer.Option("--out", help="Output MP3 path.")],
    text: Annotated[str | None, typer.Argument(help="Text to synthesize.")] = None,
    preset: Annotated[
        str | None,
        typer.Option("--preset", help="Use a built-in sample text instead of TEXT."),
    ] = None,
    voice_id: Annotated[str | None, typer.Option("--voice-id", help="Voice identifier.")] = None,
    model_id: Annotated[str | None, typer.Option("--model-id", help="Model identifier.")] = None,
    speed: Annotated[float, typer.Option("--speed")] = 1.0,
    stability: Annotated[float, typer.Option("--stability")] = 0.5,
    similarity: Annotated[float, typer.Option("--similarity")] = 0.75,
    style: Annotated[float, typer.Option("--style", help="Style exaggeration.")] = 0.0,
    language: Annotated[
        str | None,
        typer.Option("--language", help="Explicit language code override."),
    ] = None,
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    prompt_api_key: PromptApiKeyOption = False,
) -> None:
    """Generate speech with the ElevenLabs provider and write an MP3 file."""

    try:
        studio_config = load_command_config(config)
        sources = resolve_runtime_sources(api_key, prompt_api_key)
        services = build_services(studio_config, sources=sources)
        gateway = services.gateways.get("elevenlabs")
        if gateway is None:
            raise CommandError(
                stage="config",
                detail="The `elevenlabs` provider is not enabled.",
                hint="Add `elevenlabs` to `providers` in config or `VOICESTUDIO_PROVIDERS`.",
            )

        state = with_models(StudioState(), services.catalog.list_models())
        state = with_voices(state, services.catalog.list_voices())
        try:
            if voice_id is not None:
                state = select_voice(state, voice_id)
            if model_id is not None:
                state = select_model(state, model_id)
        except KeyError as exc:
            raise CommandError(
                stage="input",
                detail=f"Unknown voice or model `{exc.args[0]}`.",
                hint="Run `voicestudio voices` or `voicestudio models` to list identifiers.",
            ) from exc
        state = set_slider(state, "speed", speed)
        state = set_slider(state, "stability", stability)
        state = set_slider(state, "similarity", similarity)
        state = set_slider(state, "style_exaggeration", style)
        state = set_language_override(state, normalize_optional_string(language))

        resolved_text = _resolve_text(text, preset)
        result = gateway.synthesize(build_request(state, resolved_text))
        _write_audio(out, result.audio_bytes)
        state = add_history(
            state,
            history_item_from_result(state, resolved_text, result, audio_handle=str(out)),
        )
    except Exception as exc:
        exit_with_command_error("generate", exc)

    echo_history_item(state.history[0])


@app.command("synthesize")
def synthesize_command(
    out: Annotated[Path, typer.Option("--out", help="Output MP3 path.")],
    text: Annotated[str | None, typer.Argument(help="Text to synthesize.")] = None,
    preset: Annotated[
        str | None,
        typer.Option("--preset", help="Use a built-in sample text instead of TEXT."),
    ] = None,
    gender: Annotated[str, typer.Option("--gender", help="FEMALE or MALE.")] = "FEMALE",
    style: Annotated[str, typer.Option("--style", help="Speaking style.")] = "neutral",
    pitch: Annotated[float, typer.Option("--pitch", help="Semitones, -20 to 20.")] = 0.0,
    speed: Annotated[float, typer.Option("--speed", help="Rate, 0.25 to 4.0.")] = 1.0,
    config: ConfigOption = None,
) -> None:
    """Synthesize speech with Google Cloud Neural voices and write an MP3 file."""

    try:
        studio_config = load_command_config(config)
        services = build_services(studio_config, sources=resolve_runtime_sources(None, False))
        gateway = services.gateways.get("google")
        if gateway is None:
            raise CommandError(
                stage="config",
                detail="The `google` provider is not enabled.",
                hint="Add `google` to `providers` in config or `VOICESTUDIO_PROVIDERS`.",
            )
        result = gateway.synthesize(
            SynthesisRequest(
                text=_resolve_text(text, preset),
                gender=gender,
                style=style,
                pitch=pitch,
                speed=speed,
            )
        )
        _write_audio(out, result.audio_bytes)
    except Exception as exc:
        exit_with_command_error("synthesize", exc)

    typer.echo(f"Voice: {result.voice_id}")
    typer.echo(f"Audio: {out}")


@app.command("credentials")
def credentials_command(
    set_api_key: Annotated[
        bool,
        typer.Option(
            "--set-api-key",
            help="Prompt for API key with hidden input and store it securely.",
        ),
    ] = False,
    clear_api_key: Annotated[
        bool,
        typer.Option(
            "--clear-api-key",
            help="Clear stored API key from secure credential storage.",
        ),
    ] = False,
) -> None:
    """Manage the securely stored ElevenLabs API key."""

    if set_api_key and clear_api_key:
        exit_with_command_error(
            "credentials",
            CommandError(
                stage="credentials",
                detail="`--set-api-key` and `--clear-api-key` cannot be used together.",
                hint="Run one credentials action per command invocation.",
            ),
        )

    credential_store = create_credential_store()
    if set_api_key:
        prompted_api_key = normalize_optional_string(
            typer.prompt(
                "ElevenLabs API key (hidden input)",
                default="",
                hide_input=True,
                show_default=False,
            )
        )
        if prompted_api_key is None:
            exit_with_command_error(
                "credentials",
                CommandError(
                    stage="credentials",
                    detail="No API key entered.",
                    hint="Provide a non-empty API key when using `--set-api-key`.",
                ),
            )
        try:
            credential_store.set_api_key(prompted_api_key)
        except Exception as exc:
            exit_with_command_error(
                "credentials",
                CommandError(
                    stage="credentials",
                    detail=f"Failed to store API key securely: {exc}",
                    hint="Install and configure a keyring backend and retry.",
                ),
            )
        typer.echo("API key stored in secure credential storage.")
        return

    if clear_api_key:
        removed = credential_store.clear_api_key()
        if removed:
            typer.echo("Stored API key cleared from secure credential storage.")
        else:
            typer.echo("No stored API key found in secure credential storage.")
        return

    availability = "available" if credential_store.is_available() else "unavailable"
    has_stored_key = credential_store.get_api_key() is not None
    status = "present" if has_stored_key else "not set"
    typer.echo(f"Secure credential storage: {availability}")
    typer.echo(f"Stored ElevenLabs API key: {status}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
