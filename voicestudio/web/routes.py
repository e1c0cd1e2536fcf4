"""HTTP endpoints for catalogs and speech synthesis."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, abort, current_app, jsonify, request

from ..errors import ProviderError
from ..gateway import SynthesisGateway
from ..models.datatypes import SynthesisRequest
from .services import StudioServices

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _services() -> StudioServices:
    return current_app.extensions["voicestudio"]


def _gateway(provider_id: str) -> SynthesisGateway:
    gateway = _services().gateways.get(provider_id)
    if gateway is None:
        abort(404, description=f"Provider `{provider_id}` is not enabled.")
    return gateway


def _json_body() -> dict[str, Any]:
    """Return the JSON object body, treating malformed or non-object bodies as empty."""

    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _text(data: dict[str, Any]) -> str:
    value = data.get("text")
    return value if isinstance(value, str) else ""


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@api_bp.get("/health")
def health():
    return jsonify({"status": "ok", "providers": sorted(_services().gateways)})


@api_bp.get("/voices")
def list_voices():
    try:
        voices = _services().catalog.list_voices()
    except ProviderError:
        return jsonify({"error": "Failed to fetch voices."}), 500
    return jsonify([voice.as_payload() for voice in voices])


@api_bp.get("/models")
def list_models():
    return jsonify([model.as_payload() for model in _services().catalog.list_models()])


@api_bp.post("/tts")
def text_to_speech():
    """Synthesize with the remote API provider and return a base64 JSON envelope."""

    gateway = _gateway("elevenlabs")
    data = _json_body()
    result = gateway.synthesize(
        SynthesisRequest(
            text=_text(data),
            voice_id=_optional_str(data.get("voiceId")),
            model_id=_optional_str(data.get("modelId")),
            speed=data.get("speed"),
            stability=data.get("stability"),
            similarity=data.get("similarity"),
            style_exaggeration=data.get("styleExaggeration"),
            language_override=_optional_str(data.get("languageOverride")),
        )
    )
    return jsonify(result.as_envelope())


@api_bp.post("/synthesize")
def synthesize():
    """Synthesize with the cloud neural provider and stream raw MPEG bytes."""

    gateway = _gateway("google")
    data = _json_body()
    result = gateway.synthesize(
        SynthesisRequest(
            text=_text(data),
            gender=_optional_str(data.get("gender")),
            style=_optional_str(data.get("style")),
            pitch=data.get("pitch"),
            speed=data.get("speed"),
            volume=data.get("volume"),
        )
    )
    return Response(result.audio_bytes, mimetype=result.content_type)
