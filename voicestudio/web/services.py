"""Per-application service container shared by request handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..catalog import CatalogProvider
from ..gateway import SynthesisGateway
from ..telemetry.logger import RequestLogger


@dataclass(slots=True)
class StudioServices:
    """Catalog and gateways built once per Flask application.

    Attributes:
        catalog: Voice and model catalog provider.
        gateways: Synthesis gateways keyed by provider identifier.
        run_logger: Request event logger shared by handlers.
    """

    catalog: CatalogProvider
    gateways: dict[str, SynthesisGateway] = field(default_factory=dict)
    run_logger: RequestLogger = field(default_factory=RequestLogger)
