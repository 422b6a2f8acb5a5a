"""
Report serialization and presentation helpers.

to_payload() produces the flat response payload consumed by the popup/API
clients. The remaining helpers carry the display thresholds the popup used
(indicator levels, per-element verdicts, probability bands, status messages).
"""

from __future__ import annotations

from typing import Any

from backend_aiscan.analysis_engine.models import (
    AnalysisStatus,
    ElementResult,
    SessionReport,
)

STATUS_MESSAGES: dict[AnalysisStatus, str] = {
    AnalysisStatus.NO_MEDIA: (
        "No images or videos found on this page. "
        "Try navigating to a page with more visual content."
    ),
    AnalysisStatus.NO_ANALYZABLE: (
        "Found media but unable to analyze due to browser restrictions. "
        "This often happens with images from external domains."
    ),
}
DEFAULT_ERROR_MESSAGE = "Failed to analyze the current page"

# Indicators at or below this are not worth showing per element
SIGNIFICANT_INDICATOR = 0.3


def element_payload(result: ElementResult) -> dict[str, Any]:
    d = result.descriptor
    return {
        "src": d.source_url,
        "type": d.kind.value,
        "size": d.size_label,
        "aiScore": result.ai_score,
        "aiProbability": result.ai_score,
        "indicators": dict(result.indicators),
        "isAI": result.is_ai,
        "confidence": result.confidence,
    }


def to_payload(report: SessionReport) -> dict[str, Any]:
    """
    Flat payload: {success, error, data: {confidence, aiProbability, indicators,
    mediaCount, mediaElements, analysisStatus, errorMessage?}}.

    errorMessage is only present for non-success reports.
    """
    data: dict[str, Any] = {
        "confidence": report.confidence,
        "aiProbability": report.ai_probability,
        "indicators": dict(report.indicators),
        "mediaCount": report.media_count,
        "mediaElements": [element_payload(r) for r in report.elements],
        "analysisStatus": report.status.value,
    }
    if not report.success:
        data["errorMessage"] = report.error_message or DEFAULT_ERROR_MESSAGE
    return {
        "success": report.success,
        "error": None if report.success else (report.error_message or DEFAULT_ERROR_MESSAGE),
        "data": data,
    }


def status_message(status: AnalysisStatus, error: str | None = None) -> str:
    """User-facing message for a non-success status."""
    return STATUS_MESSAGES.get(status) or error or DEFAULT_ERROR_MESSAGE


def indicator_level(value: float) -> str:
    if value > 0.7:
        return "high"
    if value > 0.4:
        return "medium"
    return "low"


def element_verdict(ai_score: float) -> str:
    """ai above 60%, uncertain above 30%, human otherwise (on rounded percent)."""
    percent = round(ai_score * 100)
    if percent > 60:
        return "ai"
    if percent > 30:
        return "uncertain"
    return "human"


def probability_band(ai_probability: float) -> str:
    if ai_probability >= 0.7:
        return "high"
    if ai_probability >= 0.5:
        return "medium"
    return "low"


def significant_indicators(result: ElementResult) -> dict[str, float]:
    return {name: v for name, v in result.indicators.items() if v > SIGNIFICANT_INDICATOR}
