"""
Detection session — one end-to-end analysis request.

State machine: pending -> {no_media, no_analyzable, success, error}.
Intake -> analyzable filter -> per-element scoring on a thread pool
(fork-join) -> aggregation -> SessionReport. Every failure is turned into a
report at this boundary; nothing raises past run().

Usage:
    report = DetectionSession().run(descriptors)
"""

from __future__ import annotations

import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Union

from backend_aiscan.aiscan_logging import bind_session
from backend_aiscan.analysis_engine.aggregator import aggregate
from backend_aiscan.analysis_engine.models import (
    AnalysisStatus,
    ElementResult,
    MediaDescriptor,
    SessionReport,
)
from backend_aiscan.analysis_engine.scorer import score_element
from backend_aiscan.config.env import DEFAULT_MAX_WORKERS, MIN_WORKERS
from backend_aiscan.core.exceptions import (
    AIScanError,
    AnalysisFailure,
    NoAnalyzableMedia,
    NoMediaFound,
)

MediaSource = Union[Iterable[MediaDescriptor], Callable[[], Iterable[MediaDescriptor]]]


class DetectionSession:
    """
    Single-use analysis session.

    max_workers bounds the scoring pool; scoring is CPU-light and pure, so a
    pool of one is equivalent to sequential scoring.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, session_id: str | None = None):
        self.max_workers = max(MIN_WORKERS, int(max_workers))
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.status = AnalysisStatus.PENDING
        self.report: SessionReport | None = None
        self._log = bind_session(self.session_id, __name__)

    def run(self, media: MediaSource) -> SessionReport:
        """
        Analyze the supplied media and return the terminal report.

        Args:
            media: Descriptors in page order, or a zero-argument provider
                returning them (faults raised by the provider are reported
                as status error).

        Raises:
            RuntimeError: if the session already ran.
        """
        if self.status.is_terminal:
            raise RuntimeError(f"detection session {self.session_id} already finished ({self.status.value})")

        start = time.monotonic()
        self._log.info("detection_session_started", max_workers=self.max_workers)
        try:
            report = self._analyze(media)
        except AIScanError as e:
            report = SessionReport.failed(e.status, e.message)
            if e.status is AnalysisStatus.ERROR:
                self._log.warning("detection_session_failed", error=e.message)
            else:
                self._log.info(f"detection_session_{e.status.value}", error=e.message)
        except Exception as e:
            message = str(e) or e.__class__.__name__
            report = SessionReport.failed(AnalysisStatus.ERROR, message)
            self._log.exception("detection_session_failed", error=message)

        self.status = report.status
        self.report = report
        if report.success:
            self._log.info(
                "detection_session_done",
                media_count=report.media_count,
                ai_probability=report.ai_probability,
                confidence=report.confidence,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
        return report

    def _analyze(self, media: MediaSource) -> SessionReport:
        candidates = self._intake(media)
        if not candidates:
            raise NoMediaFound()

        analyzable = [d for d in candidates if d.is_analyzable]
        if not analyzable:
            raise NoAnalyzableMedia()

        results = self._score_all(analyzable)
        page = aggregate(results)
        return SessionReport(
            status=AnalysisStatus.SUCCESS,
            ai_probability=page.ai_probability,
            confidence=page.confidence,
            indicators=page.indicators,
            elements=tuple(results),
        )

    def _intake(self, media: MediaSource) -> list[MediaDescriptor]:
        source = media() if callable(media) else media
        if source is None:
            return []
        candidates = list(source)
        for item in candidates:
            if not isinstance(item, MediaDescriptor):
                raise AnalysisFailure(f"Unsupported media descriptor: {type(item).__name__}")
        return candidates

    def _score_all(self, descriptors: list[MediaDescriptor]) -> list[ElementResult]:
        """Fork-join: score every descriptor on the pool, keep page order."""
        workers = min(self.max_workers, len(descriptors))
        if workers <= 1:
            return [score_element(d) for d in descriptors]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="aiscan-score") as executor:
            futures = [executor.submit(score_element, d) for d in descriptors]
            return [fut.result() for fut in futures]


def run_detection(media: MediaSource, *, max_workers: int = DEFAULT_MAX_WORKERS) -> SessionReport:
    """Convenience wrapper: run a fresh session and return its report."""
    return DetectionSession(max_workers=max_workers).run(media)
