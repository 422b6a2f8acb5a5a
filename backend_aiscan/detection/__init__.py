"""
Detection package — session orchestration and report serialization.

A DetectionSession drives one analysis request from descriptor intake to the
final SessionReport; report helpers turn it into the flat client payload.
"""

from backend_aiscan.detection.report import to_payload
from backend_aiscan.detection.session import DetectionSession, run_detection

__all__ = ["DetectionSession", "run_detection", "to_payload"]
