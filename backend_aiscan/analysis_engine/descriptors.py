"""
Element normalizer — page element snapshots to MediaDescriptor.

Accepts the loose dicts a page script (or a JSON file) produces for <img> and
<video> elements and resolves one width/height per element: natural size then
layout size for images; natural size, video size, then layout size for videos.
Malformed dimensions become None so the descriptor reports as not analyzable.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from backend_aiscan.analysis_engine.models import MediaDescriptor, MediaKind

# Elements rendered smaller than this (icons, buttons) are not candidates
DEFAULT_MIN_RENDERED_SIZE = 100


def _first(element: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = element.get(key)
        if value is not None and value != "":
            return value
    return None


def _dimension(value: Any) -> int | None:
    """Positive integer dimension, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else None


def _duration(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


# (width key, height key) in lookup order; layout width/height come last
IMAGE_SIZE_KEYS = (("naturalWidth", "naturalHeight"), ("width", "height"))
VIDEO_SIZE_KEYS = (("naturalWidth", "naturalHeight"), ("videoWidth", "videoHeight"), ("width", "height"))


def media_kind(element: Mapping[str, Any]) -> MediaKind:
    raw = str(_first(element, "kind", "type", "tagName") or "image").strip().lower()
    return MediaKind.VIDEO if raw == "video" else MediaKind.IMAGE


def _resolve_size(element: Mapping[str, Any], kind: MediaKind) -> tuple[int | None, int | None]:
    """First key pair giving a valid width and height, else (None, None)."""
    pairs = VIDEO_SIZE_KEYS if kind is MediaKind.VIDEO else IMAGE_SIZE_KEYS
    for w_key, h_key in pairs:
        width = _dimension(element.get(w_key))
        height = _dimension(element.get(h_key))
        if width and height:
            return width, height
    return None, None


def descriptor_from_element(element: Mapping[str, Any]) -> MediaDescriptor:
    """
    Build a descriptor from an element snapshot.

    Recognized keys: kind/type/tagName, sourceUrl/src/currentSrc,
    naturalWidth/naturalHeight, videoWidth/videoHeight, width/height,
    durationSeconds/duration.
    """
    kind = media_kind(element)
    width, height = _resolve_size(element, kind)
    duration = None
    if kind is MediaKind.VIDEO:
        duration = _duration(_first(element, "durationSeconds", "duration"))
    source = _first(element, "sourceUrl", "src", "currentSrc")
    return MediaDescriptor(
        kind=kind,
        source_url=str(source) if source is not None else "",
        width=width,
        height=height,
        duration_seconds=duration,
    )


def is_candidate(
    element: Mapping[str, Any],
    *,
    min_rendered_size: float = DEFAULT_MIN_RENDERED_SIZE,
) -> bool:
    """
    Candidate filter applied before analysis.

    Images need a source and, when the rendered box is known, a rendered
    width and height of at least min_rendered_size. Videos need a source or
    a <source> child (hasSource).
    """
    source = _first(element, "sourceUrl", "src", "currentSrc")
    if media_kind(element) is MediaKind.VIDEO:
        return bool(source) or bool(element.get("hasSource"))
    if not source:
        return False
    rendered_w = element.get("renderedWidth")
    rendered_h = element.get("renderedHeight")
    if rendered_w is None or rendered_h is None:
        return True
    try:
        return float(rendered_w) >= min_rendered_size and float(rendered_h) >= min_rendered_size
    except (TypeError, ValueError):
        return False


def select_candidates(
    elements: Iterable[Mapping[str, Any]],
    *,
    min_rendered_size: float = DEFAULT_MIN_RENDERED_SIZE,
) -> list[MediaDescriptor]:
    """Normalize the candidate elements, in page order."""
    return [
        descriptor_from_element(element)
        for element in elements
        if is_candidate(element, min_rendered_size=min_rendered_size)
    ]
