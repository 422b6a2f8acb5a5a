"""
Backend AIScan — heuristic synthetic-media scoring for page media.

Scores images and videos from already-known metadata (dimensions, source URL,
duration) and aggregates per-element results into a page-level report.
"""

__version__ = "0.1.0"
