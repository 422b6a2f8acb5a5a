"""
Application-level exceptions.

Each detection failure carries the AnalysisStatus it maps to, so the
detection session can turn any of them into a report without a lookup table.
"""

from __future__ import annotations

from backend_aiscan.analysis_engine.models import AnalysisStatus

NO_MEDIA_MESSAGE = "No images or videos found on this page"
NO_ANALYZABLE_MESSAGE = "Found media but unable to analyze (CORS restrictions or invalid images)"


class AIScanError(Exception):
    """Base class for detection failures recovered at the session boundary."""

    status: AnalysisStatus = AnalysisStatus.ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoMediaFound(AIScanError):
    """Intake produced no candidate media."""

    status = AnalysisStatus.NO_MEDIA

    def __init__(self, message: str = NO_MEDIA_MESSAGE):
        super().__init__(message)


class NoAnalyzableMedia(AIScanError):
    """Candidates exist but none has resolvable dimensions."""

    status = AnalysisStatus.NO_ANALYZABLE

    def __init__(self, message: str = NO_ANALYZABLE_MESSAGE):
        super().__init__(message)


class AnalysisFailure(AIScanError):
    """Unexpected fault during intake, scoring, or aggregation."""

    status = AnalysisStatus.ERROR
