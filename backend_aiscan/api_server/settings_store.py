"""
JSON-file settings store.

Persists the user-facing detector settings (autoAnalyze, showNotifications,
analysisThreshold) between runs. A missing or unreadable file yields
defaults; writes go through a temp file and os.replace.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.config.env import get_settings_path
from backend_aiscan.config.settings import DetectorSettings, get_settings

logger = get_logger(__name__)


class SettingsStore:
    """Thread-safe load/save of DetectorSettings at a JSON path."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else get_settings_path()
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("settings_read_failed", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        stored = data.get("settings", data)
        return stored if isinstance(stored, dict) else {}

    def load(self) -> DetectorSettings:
        with self._lock:
            stored = self._read()
        try:
            return DetectorSettings.from_dict(stored)
        except ValueError as e:
            logger.warning("settings_invalid_using_defaults", path=str(self.path), error=str(e))
            return get_settings()

    def save(self, settings: DetectorSettings) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump({"settings": settings.to_dict()}, f, indent=2)
            os.replace(tmp, self.path)
        logger.info("settings_updated", path=str(self.path), **settings.to_dict())

    def update(self, updates: dict[str, Any]) -> DetectorSettings:
        """Apply stored-form updates to the current settings and persist them."""
        settings = self.load().with_updates(updates)
        self.save(settings)
        return settings
