"""
Structured logging for Backend AIScan.

JSON logs with timestamp, event_type, session_id.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_aiscan.aiscan_logging.logger import bind_session, get_logger

__all__ = ["bind_session", "get_logger"]
