"""Telemetry and observability helpers.

This package emits structured request events for auditing gateway activity.
"""

from .logger import RequestLogger, configure_logging

__all__ = ["RequestLogger", "configure_logging"]
