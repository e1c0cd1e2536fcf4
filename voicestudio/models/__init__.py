"""Shared typed data models for Voice Studio.

This package contains dataclasses used across modules to avoid cross-module
coupling and circular imports.
"""

from .datatypes import (
    Gender,
    HistoryItem,
    ModelCatalogEntry,
    SynthesisRequest,
    SynthesisResult,
    VoiceCatalogEntry,
    VoiceStyleConfig,
)

__all__ = [
    "Gender",
    "HistoryItem",
    "ModelCatalogEntry",
    "SynthesisRequest",
    "SynthesisResult",
    "VoiceCatalogEntry",
    "VoiceStyleConfig",
]
