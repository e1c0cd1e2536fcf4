"""Top-level package for Voice Studio.

This package provides a small HTTP backend that forwards text-to-speech requests
to Google Cloud Text-to-Speech or ElevenLabs. The main entry point is
`create_app`.
"""

from .web.app import create_app

__all__ = ["create_app", "__version__"]

__version__ = "0.1.0"
