"""Diagnostic reporting for attribute extraction.

The extractor reports anomalies through :class:`AttributeReporter` and never
touches a logger or stream directly, so tests can record what was reported.
"""
from __future__ import annotations
import json
import logging
import sys
from typing import Any, Optional, Protocol


class AttributeReporter(Protocol):
    """Two-severity sink for extraction diagnostics."""

    def warn(self, tag: str, message: str) -> None:
        ...

    def error(self, tag: str, message: str) -> None:
        ...


class LoggingReporter:
    """Reporter backed by a stdlib logger. Never raises."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("dsync.core.scim_attributes")

    def warn(self, tag: str, message: str) -> None:
        self._emit(logging.WARNING, tag, message)

    def error(self, tag: str, message: str) -> None:
        self._emit(logging.ERROR, tag, message)

    def _emit(self, level: int, tag: str, message: str) -> None:
        try:
            self.logger.log(level, "[%s] %s", tag, message)
        except Exception as e:  # a broken handler must not break extraction
            print(f"[reporting] Warning: Failed to log {tag!r}: {e}", file=sys.stderr)


def safe_stringify(value: Any) -> str:
    """Serialize ``value`` to JSON for log lines without ever raising.

    Non-JSON values are rendered with ``str()``; anything that still fails
    (e.g. circular references) falls back to ``repr()``.
    """
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        try:
            return repr(value)
        except Exception:
            return f"<unserializable {type(value).__name__}>"
