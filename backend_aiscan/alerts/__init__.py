"""
Alerts package — page-level notifications.

Raises a notification when a page's AI probability reaches the configured
analysis threshold and notifications are enabled.
"""

from backend_aiscan.alerts.engine import Notification, evaluate_notification

__all__ = ["Notification", "evaluate_notification"]
