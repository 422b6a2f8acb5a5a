"""
Structured JSON logging: timestamp, session_id, event_type.

structlog with ISO timestamps, log level, rounded score fields, and consistent keys for
aggregation. All modules should use get_logger() and pass event_type
(and session_id / status where relevant).

Uses only Python stdlib logging and structlog; no backend_aiscan imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output for production (LOG_FORMAT=json); human-readable for local
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


# Score-like fields are rounded in log output
SCORE_FIELDS = ("ai_probability", "ai_score", "confidence", "threshold")
SCORE_DIGITS = 4


def _round_scores(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Round float score fields to SCORE_DIGITS places."""
    for key in SCORE_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, float):
            event_dict[key] = round(value, SCORE_DIGITS)
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once at import: JSON, timestamp, level, event_type."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _round_scores,
    ]
    if LOG_FORMAT == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        # stderr keeps CLI stdout clean for JSON payloads
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and optional fields:
        logger = get_logger(__name__)
        logger.info("detection_session_done", session_id=sid, media_count=3, ai_probability=0.42)
    Output (JSON): {"event_type": "detection_session_done", "session_id": "...", "media_count": 3,
    "ai_probability": 0.42, "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_session(session_id: str, name: str = "backend_aiscan") -> structlog.BoundLogger:
    """Return a logger for name with session_id bound to all subsequent log calls."""
    return get_logger(name).bind(session_id=session_id)
