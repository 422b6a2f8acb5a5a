"""
Data models for analysis engine input and output.

All models are frozen value types: descriptors come in from the element
normalizer, element results and session reports go out. Nothing is mutated
after construction, so results can be computed on worker threads and handed
over by value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    NO_MEDIA = "no_media"
    NO_ANALYZABLE = "no_analyzable"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self is not AnalysisStatus.PENDING


IndicatorSet = Mapping[str, float]

# Element is labelled AI-generated above this score
AI_ELEMENT_THRESHOLD = 0.6


def freeze_indicators(values: Mapping[str, float]) -> IndicatorSet:
    """Copy into a read-only mapping; insertion order is kept."""
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Normalized metadata for one page media element.

    width/height are the resolved intrinsic dimensions (natural size for
    images, video size for videos); None when the media has not loaded.
    """

    kind: MediaKind
    source_url: str = ""
    width: int | None = None
    height: int | None = None
    duration_seconds: float | None = None

    @property
    def has_dimensions(self) -> bool:
        """True when both width and height are known (non-zero)."""
        return bool(self.width) and bool(self.height)

    @property
    def is_analyzable(self) -> bool:
        """Both dimensions present and positive."""
        return _positive(self.width) and _positive(self.height)

    @property
    def size_label(self) -> str:
        return f"{self.width}x{self.height}" if self.width else "Unknown"


def _positive(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


@dataclass(frozen=True)
class ElementResult:
    """Scored descriptor: indicator values, weighted AI score, and confidence."""

    descriptor: MediaDescriptor
    indicators: IndicatorSet
    ai_score: float
    confidence: float

    @property
    def is_ai(self) -> bool:
        return self.ai_score > AI_ELEMENT_THRESHOLD


@dataclass(frozen=True)
class SessionReport:
    """Outcome of one detection session; zeroed for every non-success status."""

    status: AnalysisStatus
    ai_probability: float = 0.0
    confidence: float = 0.0
    indicators: IndicatorSet = field(default_factory=lambda: freeze_indicators({}))
    elements: tuple[ElementResult, ...] = ()
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status is AnalysisStatus.SUCCESS

    @property
    def media_count(self) -> int:
        return len(self.elements)

    @classmethod
    def failed(cls, status: AnalysisStatus, message: str) -> SessionReport:
        return cls(status=status, error_message=message)
