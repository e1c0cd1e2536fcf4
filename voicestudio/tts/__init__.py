"""Text-to-speech provider abstractions.

This package contains the voice/style mapper and the provider implementations
used by the synthesis gateway.
"""

from .synthesizer import CloudNeuralProvider, RemoteApiProvider, TtsProvider
from .voices import build_markup, resolve_voice

__all__ = [
    "CloudNeuralProvider",
    "RemoteApiProvider",
    "TtsProvider",
    "build_markup",
    "resolve_voice",
]
