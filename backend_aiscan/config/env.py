"""
Environment variable loading and validation for AIScan.

- AISCAN_MAX_WORKERS: thread pool size for per-element scoring (default: 4)
- AISCAN_SETTINGS_PATH: JSON file backing the detector settings store
- API_HOST / API_PORT: HTTP surface bind address
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_aiscan/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_MAX_WORKERS = 4
MIN_WORKERS = 1
DEFAULT_SETTINGS_FILENAME = "aiscan_settings.json"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


def load_aiscan_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def get_max_workers() -> int:
    """
    Return AISCAN_MAX_WORKERS from env, clamped to at least 1.
    Falls back to the default on missing or non-integer values.
    """
    load_aiscan_env()
    raw = (os.getenv("AISCAN_MAX_WORKERS") or "").strip()
    if not raw:
        return DEFAULT_MAX_WORKERS
    try:
        return max(MIN_WORKERS, int(raw))
    except ValueError:
        return DEFAULT_MAX_WORKERS


def get_settings_path() -> Path:
    """Return AISCAN_SETTINGS_PATH, or the default settings file in the project root."""
    load_aiscan_env()
    raw = (os.getenv("AISCAN_SETTINGS_PATH") or "").strip()
    if raw:
        return Path(raw)
    return _ROOT / DEFAULT_SETTINGS_FILENAME


def get_api_host() -> str:
    load_aiscan_env()
    return (os.getenv("API_HOST") or DEFAULT_API_HOST).strip() or DEFAULT_API_HOST


def get_api_port() -> int:
    load_aiscan_env()
    raw = (os.getenv("API_PORT") or "").strip()
    try:
        return int(raw) if raw else DEFAULT_API_PORT
    except ValueError:
        return DEFAULT_API_PORT
