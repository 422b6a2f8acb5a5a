"""
Configuration management for AIScan.

Loads settings from environment variables (.env via python-dotenv) and
exposes the detector settings dataclass.
"""

from backend_aiscan.config.settings import DetectorSettings, get_settings  # noqa: F401

__all__ = ["DetectorSettings", "get_settings"]
