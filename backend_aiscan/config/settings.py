"""
Detector settings.

Mirrors the settings the browser extension kept in local storage
(autoAnalyze, showNotifications, analysisThreshold) plus the worker pool
size taken from the environment. Stored form uses camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from backend_aiscan.config.env import MIN_WORKERS, get_max_workers

DEFAULT_ANALYSIS_THRESHOLD = 0.7

# stored key -> attribute
_STORED_KEYS = {
    "autoAnalyze": "auto_analyze",
    "showNotifications": "show_notifications",
    "analysisThreshold": "analysis_threshold",
}


@dataclass(frozen=True)
class DetectorSettings:
    """User-facing detector settings; immutable, use with_updates() to change."""

    auto_analyze: bool = True
    """Stored for the host, which decides whether to analyze pages on load; the engine never reads it."""
    show_notifications: bool = True
    analysis_threshold: float = DEFAULT_ANALYSIS_THRESHOLD
    """Page AI probability at or above which a notification is raised."""
    max_workers: int = field(default_factory=get_max_workers)

    def __post_init__(self) -> None:
        threshold = self.analysis_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ValueError("analysis_threshold must be a number")
        if not 0.0 <= float(threshold) <= 1.0:
            raise ValueError(f"analysis_threshold must be within [0, 1], got {threshold}")
        object.__setattr__(self, "analysis_threshold", float(threshold))
        object.__setattr__(self, "max_workers", max(MIN_WORKERS, int(self.max_workers)))

    def to_dict(self) -> dict[str, Any]:
        """Stored (camelCase) form; max_workers is environment-owned and not stored."""
        return {
            "autoAnalyze": self.auto_analyze,
            "showNotifications": self.show_notifications,
            "analysisThreshold": self.analysis_threshold,
        }

    def with_updates(self, updates: dict[str, Any]) -> DetectorSettings:
        """Return a copy with stored-form keys applied; unknown keys are ignored."""
        changes = {
            attr: updates[key] for key, attr in _STORED_KEYS.items() if key in updates
        }
        for attr in ("auto_analyze", "show_notifications"):
            if attr in changes:
                changes[attr] = bool(changes[attr])
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DetectorSettings:
        return cls().with_updates(data or {})


def get_settings() -> DetectorSettings:
    """Return default settings with environment-derived values applied."""
    return DetectorSettings()
