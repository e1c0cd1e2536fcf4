"""Structured request logging utilities.

Responsibilities:
- Emit concise, deterministic request-level events through `loguru`.
- Keep secrets and user text out of log lines.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger


_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"


def configure_logging(sink: TextIO | None = None, level: str = "INFO") -> None:
    """Replace default loguru handlers with one deterministic sink."""

    logger.remove()
    logger.add(sink or sys.stderr, format=_LOG_FORMAT, level=level, colorize=False)


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RequestLogger:
    """Emit deterministic events for gateway and catalog activity."""

    def _emit(self, level: str, event: str, route: str, **context: object) -> None:
        """Emit one structured request log line."""

        line = f"[request] level={level} route={route} event={event}{_format_context(context)}"
        logger.log(level, line)

    def log_request_start(self, route: str, **context: object) -> None:
        """Emit a request-start event."""

        self._emit("INFO", "start", route, **context)

    def log_request_complete(self, route: str, **context: object) -> None:
        """Emit a request-complete event."""

        self._emit("INFO", "complete", route, **context)

    def log_request_rejected(self, route: str, reason: str) -> None:
        """Emit a client-error event for a request rejected before provider calls."""

        self._emit("WARNING", "rejected", route, reason=reason)

    def log_warning(self, route: str, event: str, **context: object) -> None:
        """Emit a non-fatal warning event, such as a normalized voice style."""

        self._emit("WARNING", event, route, **context)

    def log_provider_failure(self, route: str, exc: BaseException) -> None:
        """Emit a provider-failure event and keep the traceback server-side."""

        failure_kind = getattr(exc, "failure_kind", "unknown")
        self._emit("ERROR", "failure", route, error_type=type(exc).__name__, kind=failure_kind)
        logger.opt(exception=exc).debug("Provider failure detail: {}", exc)
