"""
Notification engine: page AI probability threshold to user notification.

Defines when to notify (successful analysis, notifications enabled, page AI
probability at or above the analysis threshold) and builds the notification
text. Delivery belongs to the host; raised notifications are logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.analysis_engine.models import SessionReport
from backend_aiscan.config.settings import DetectorSettings

logger = get_logger(__name__)

NOTIFICATION_TITLE = "AI Content Detector"
# Max message length (host notification APIs truncate long bodies)
MAX_MESSAGE_LENGTH = 200


@dataclass(frozen=True)
class Notification:
    """Notification to surface to the user for one analyzed page."""

    title: str
    message: str
    ai_probability: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "aiProbability": self.ai_probability,
        }


def _message_truncate(message: str) -> str:
    if len(message) <= MAX_MESSAGE_LENGTH:
        return message
    return message[: MAX_MESSAGE_LENGTH - 3] + "..."


def evaluate_notification(
    report: SessionReport,
    settings: DetectorSettings | None = None,
) -> Notification | None:
    """
    Return a Notification when the report crosses the analysis threshold.

    Only successful reports notify; disabled notifications never do.
    """
    cfg = settings or DetectorSettings()
    if not cfg.show_notifications or not report.success:
        return None
    if report.ai_probability < cfg.analysis_threshold:
        return None

    ai_count = sum(1 for element in report.elements if element.is_ai)
    message = _message_truncate(
        f"Likely AI-generated content: {round(report.ai_probability * 100)}% probability "
        f"({ai_count} of {report.media_count} media flagged)"
    )
    notification = Notification(
        title=NOTIFICATION_TITLE,
        message=message,
        ai_probability=report.ai_probability,
    )
    logger.info(
        "notification_raised",
        ai_probability=report.ai_probability,
        threshold=cfg.analysis_threshold,
        media_count=report.media_count,
        ai_count=ai_count,
    )
    return notification
