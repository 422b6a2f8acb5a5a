"""
FastAPI server — message surface for the detector.

Maps the extension's runtime messages onto HTTP:
  test            -> GET  /health
  analyzeContent  -> POST /api/analyze
  getSettings     -> GET  /api/settings
  updateSettings  -> PUT  /api/settings
Each analyze request runs in its own DetectionSession. Settings live in a
JSON file (AISCAN_SETTINGS_PATH).
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from backend_aiscan import __version__
from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.alerts.engine import evaluate_notification
from backend_aiscan.analysis_engine.descriptors import DEFAULT_MIN_RENDERED_SIZE, select_candidates
from backend_aiscan.api_server.settings_store import SettingsStore
from backend_aiscan.detection.report import to_payload
from backend_aiscan.detection.session import DetectionSession

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Config and dependency
# -----------------------------------------------------------------------------

def get_settings_store() -> SettingsStore:
    """Dependency: settings store at AISCAN_SETTINGS_PATH (read per request)."""
    return SettingsStore()


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    """POST /api/analyze body: page media element snapshots in page order."""

    media: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Element snapshots (tagName, src, naturalWidth/Height, videoWidth/Height, duration, ...)",
    )
    minRenderedSize: float = Field(
        DEFAULT_MIN_RENDERED_SIZE,
        ge=0,
        description="Images rendered smaller than this are skipped as candidates",
    )


class AnalyzeResponse(BaseModel):
    """POST /api/analyze response: flat report payload plus optional notification."""

    success: bool
    error: str | None = None
    data: dict[str, Any]
    notification: dict[str, Any] | None = Field(None, description="Set when the page crosses the analysis threshold")


class SettingsResponse(BaseModel):
    settings: dict[str, Any]


class SettingsUpdateRequest(BaseModel):
    """PUT /api/settings body; omitted fields keep their current value."""

    autoAnalyze: bool | None = None
    showNotifications: bool | None = None
    analysisThreshold: float | None = Field(None, description="Page AI probability that triggers a notification (0-1)")


class SettingsUpdateResponse(BaseModel):
    success: bool
    settings: dict[str, Any]


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="AIScan API",
    description="Heuristic synthetic-media scoring for page images and videos.",
    version=__version__,
)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: detector is loaded."""
    return {"status": "ok", "message": "Detector is loaded"}


@app.post("/api/analyze", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest, store: SettingsStore = Depends(get_settings_store)) -> AnalyzeResponse:
    """
    Analyze one page's media. Always 200: failures (no media, nothing
    analyzable, errors) are reported in the payload's analysisStatus.
    """
    settings = store.load()
    logger.info("api_analyze_called", element_count=len(body.media))
    session = DetectionSession(max_workers=settings.max_workers)
    report = session.run(
        lambda: select_candidates(body.media, min_rendered_size=body.minRenderedSize)
    )
    payload = to_payload(report)
    notification = evaluate_notification(report, settings)
    return AnalyzeResponse(
        success=payload["success"],
        error=payload["error"],
        data=payload["data"],
        notification=notification.to_dict() if notification else None,
    )


@app.get("/api/settings", response_model=SettingsResponse)
def get_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsResponse:
    return SettingsResponse(settings=store.load().to_dict())


@app.put("/api/settings", response_model=SettingsUpdateResponse)
def update_settings(
    body: SettingsUpdateRequest,
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsUpdateResponse:
    """Merge and persist settings. 400 when the merged settings are invalid."""
    updates = body.model_dump(exclude_none=True)
    try:
        settings = store.update(updates)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SettingsUpdateResponse(success=True, settings=settings.to_dict())
