"""Flask application factory for the Voice Studio HTTP service.

Responsibilities:
- Build provider-backed services from configuration.
- Register the API blueprint, CORS, and JSON error handlers.

Key public functions:
- `create_app`: build a configured Flask application.
"""

from __future__ import annotations

from collections.abc import Mapping

from flask import Flask, jsonify
from flask_cors import CORS
from loguru import logger
from werkzeug.exceptions import HTTPException

from ..catalog import CatalogProvider
from ..config import ConfigLoader, RuntimeConfigSources, StudioConfig
from ..errors import ProviderError, StudioError
from ..gateway import SynthesisGateway
from ..provider_factory import ProviderFactory
from ..telemetry.logger import RequestLogger
from ..tts.synthesizer import TtsProvider
from .routes import api_bp
from .services import StudioServices


def build_services(
    config: StudioConfig,
    *,
    sources: RuntimeConfigSources | None = None,
    providers: Mapping[str, TtsProvider] | None = None,
    catalog: CatalogProvider | None = None,
) -> StudioServices:
    """Build the catalog and one gateway per enabled provider.

    `providers` and `catalog` replace the factory-built instances when given.
    """

    run_logger = RequestLogger()
    api_key = config.resolved_api_key(sources)
    if api_key is None and config.provider_enabled("elevenlabs"):
        logger.warning(
            "ELEVENLABS_API_KEY is not set; voice listing and /api/tts requests will fail."
        )

    gateways: dict[str, SynthesisGateway] = {}
    for provider_id in config.providers:
        provider = (providers or {}).get(provider_id) or ProviderFactory.create_tts_provider(
            provider_id, config, api_key=api_key
        )
        gateways[provider_id] = SynthesisGateway(
            provider,
            max_text_chars=config.max_text_chars,
            run_logger=run_logger,
        )

    return StudioServices(
        catalog=catalog or ProviderFactory.create_catalog(config, api_key=api_key),
        gateways=gateways,
        run_logger=run_logger,
    )


def create_app(
    config: StudioConfig | None = None,
    *,
    sources: RuntimeConfigSources | None = None,
    providers: Mapping[str, TtsProvider] | None = None,
    catalog: CatalogProvider | None = None,
) -> Flask:
    """Create the Flask application serving the `/api` endpoints."""

    resolved_config = config if config is not None else ConfigLoader.from_env()
    resolved_config.validate()

    app = Flask(__name__)
    CORS(app)
    app.config["VOICESTUDIO_CONFIG"] = resolved_config
    app.extensions["voicestudio"] = build_services(
        resolved_config,
        sources=sources,
        providers=providers,
        catalog=catalog,
    )
    app.register_blueprint(api_bp)

    @app.errorhandler(StudioError)
    def handle_studio_error(exc: StudioError):
        if isinstance(exc, ProviderError):
            logger.error("Provider failure ({}): {}", exc.failure_kind, exc.message)
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.opt(exception=exc).error("Unhandled request failure: {}", type(exc).__name__)
        return jsonify({"error": "Error generating speech"}), 500

    return app
