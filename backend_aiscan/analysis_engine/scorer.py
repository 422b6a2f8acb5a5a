"""
Element scoring — weighted indicator mean and per-element confidence.

Responsibilities:
- Run the indicator battery for one descriptor (video adds its own indicator).
- Combine indicator values into a weighted mean AI score in [0, 1].
- Derive a confidence value that measures signal strength, not AI-ness.
"""

from __future__ import annotations

from typing import Mapping

from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.analysis_engine import indicators as ind
from backend_aiscan.analysis_engine.models import (
    ElementResult,
    IndicatorSet,
    MediaDescriptor,
    freeze_indicators,
)

logger = get_logger(__name__)

INDICATOR_WEIGHTS: dict[str, float] = {
    ind.PERFECT_SYMMETRY: 0.15,
    ind.UNUSUAL_PATTERNS: 0.20,
    ind.COLOR_CONSISTENCY: 0.15,
    ind.TEXTURE_ANALYSIS: 0.15,
    ind.EDGE_DETECTION: 0.15,
    ind.METADATA_ANALYSIS: 0.25,
    ind.FILE_CHARACTERISTICS: 0.20,
    ind.AI_ARTIFACTS: 0.30,
    ind.VIDEO_CHARACTERISTICS: 0.35,
    ind.PROCESSED_IMAGE_ANALYSIS: 0.40,
}
DEFAULT_WEIGHT = 0.10

BASE_CONFIDENCE = 0.5
KNOWN_DIMENSIONS_BONUS = 0.2
STRONG_INDICATOR_BONUS = 0.1
STRONG_INDICATOR_THRESHOLD = 0.7


def compute_indicators(descriptor: MediaDescriptor) -> IndicatorSet:
    """
    Evaluate every indicator that applies to the descriptor's media kind.

    Indicators are independent; one that raises is logged and scored 0 so a
    malformed descriptor never fails the element.
    """
    values: dict[str, float] = {}
    for name, fn in ind.indicators_for(descriptor.kind):
        try:
            values[name] = fn(descriptor)
        except Exception as e:
            logger.warning(
                "indicator_failed",
                indicator=name,
                source_url=(descriptor.source_url or "")[:80],
                error=str(e),
            )
            values[name] = 0.0
    return freeze_indicators(values)


def compute_element_score(indicators: Mapping[str, float]) -> float:
    """
    Weighted mean of indicator values: sum(value * weight) / sum(weight).

    Weights come from INDICATOR_WEIGHTS; unknown names weigh DEFAULT_WEIGHT.
    Stays in [0, 1] when every value is in [0, 1]. Empty input scores 0.
    """
    if not indicators:
        return 0.0
    weighted_score = 0.0
    total_weight = 0.0
    for name, value in indicators.items():
        weight = INDICATOR_WEIGHTS.get(name, DEFAULT_WEIGHT)
        weighted_score += value * weight
        total_weight += weight
    return weighted_score / total_weight


def compute_element_confidence(
    descriptor: MediaDescriptor,
    indicators: Mapping[str, float],
) -> float:
    """Base 0.5, +0.2 for known dimensions, +0.1 per indicator above 0.7; capped at 1."""
    confidence = BASE_CONFIDENCE
    if descriptor.has_dimensions:
        confidence += KNOWN_DIMENSIONS_BONUS
    strong = sum(1 for value in indicators.values() if value > STRONG_INDICATOR_THRESHOLD)
    confidence += strong * STRONG_INDICATOR_BONUS
    return min(confidence, 1.0)


def score_element(descriptor: MediaDescriptor) -> ElementResult:
    """Score one descriptor. Pure: same descriptor, same result."""
    indicators = compute_indicators(descriptor)
    return ElementResult(
        descriptor=descriptor,
        indicators=indicators,
        ai_score=compute_element_score(indicators),
        confidence=compute_element_confidence(descriptor, indicators),
    )

