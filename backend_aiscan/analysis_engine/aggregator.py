"""
Page-level aggregation of element results.

Averages each indicator over the elements that produced it, averages element
AI scores into the page probability, and derives page confidence from the
probability band and element count. All sums use math.fsum so the result
does not depend on element order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from backend_aiscan.analysis_engine.models import ElementResult, IndicatorSet, freeze_indicators

HIGH_SCORE_CONFIDENCE = 0.8
LOW_SCORE_CONFIDENCE = 0.6
SCORE_CONFIDENCE_CUTOFF = 0.5
ELEMENT_CONFIDENCE_BASE = 0.5
ELEMENT_CONFIDENCE_STEP = 0.1
ELEMENT_CONFIDENCE_CAP = 0.9


@dataclass(frozen=True)
class PageAggregate:
    """Averaged indicators, page AI probability, and page confidence."""

    indicators: IndicatorSet
    ai_probability: float
    confidence: float


def average_indicators(results: Sequence[ElementResult]) -> IndicatorSet:
    """
    Mean per indicator name over the elements that carry it.

    Names are the union across elements; video-only indicators are averaged
    over video elements only.
    """
    collected: dict[str, list[float]] = {}
    for result in results:
        for name, value in result.indicators.items():
            collected.setdefault(name, []).append(value)
    return freeze_indicators(
        {name: math.fsum(values) / len(values) for name, values in collected.items()}
    )


def page_confidence(ai_probability: float, element_count: int) -> float:
    score_confidence = (
        HIGH_SCORE_CONFIDENCE if ai_probability > SCORE_CONFIDENCE_CUTOFF else LOW_SCORE_CONFIDENCE
    )
    element_confidence = min(
        ELEMENT_CONFIDENCE_CAP,
        ELEMENT_CONFIDENCE_BASE + element_count * ELEMENT_CONFIDENCE_STEP,
    )
    return (score_confidence + element_confidence) / 2


def aggregate(results: Sequence[ElementResult]) -> PageAggregate:
    """
    Fold element results into a page aggregate.

    Args:
        results: Scored elements; must be non-empty (the detection session
            reports empty pages before aggregation).

    Returns:
        PageAggregate with averaged indicators, mean AI score, and confidence.

    Raises:
        ValueError: if results is empty.
    """
    if not results:
        raise ValueError("aggregate() requires at least one element result")
    ai_probability = math.fsum(r.ai_score for r in results) / len(results)
    return PageAggregate(
        indicators=average_indicators(results),
        ai_probability=ai_probability,
        confidence=page_confidence(ai_probability, len(results)),
    )
