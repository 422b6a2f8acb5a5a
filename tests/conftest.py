"""
Pytest fixtures for AIScan tests. Settings store points at a temporary JSON file.
"""

from __future__ import annotations

import pytest

from backend_aiscan.analysis_engine.models import MediaDescriptor, MediaKind


@pytest.fixture
def image():
    """Factory for image descriptors."""

    def _make(width=1024, height=1024, source_url="https://x/img.png"):
        return MediaDescriptor(kind=MediaKind.IMAGE, source_url=source_url, width=width, height=height)

    return _make


@pytest.fixture
def video():
    """Factory for video descriptors."""

    def _make(width=1920, height=1080, source_url="https://cdn.example.com/clip.mp4", duration_seconds=None):
        return MediaDescriptor(
            kind=MediaKind.VIDEO,
            source_url=source_url,
            width=width,
            height=height,
            duration_seconds=duration_seconds,
        )

    return _make


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Point the settings store at a temporary file (not created yet)."""
    path = tmp_path / "aiscan_settings.json"
    monkeypatch.setenv("AISCAN_SETTINGS_PATH", str(path))
    monkeypatch.delenv("AISCAN_MAX_WORKERS", raising=False)
    return path


@pytest.fixture
def client(settings_path):
    """FastAPI TestClient. Depends on settings_path so the temp file is set before requests."""
    from fastapi.testclient import TestClient

    from backend_aiscan.api_server.server import app

    return TestClient(app)
