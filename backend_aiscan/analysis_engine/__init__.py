"""
Analysis engine package — synthetic-media likelihood scoring.

Consumes normalized media descriptors, applies the heuristic indicator
battery, and produces per-element scores and a page-level aggregate.
"""

from backend_aiscan.analysis_engine.models import (
    AnalysisStatus,
    ElementResult,
    IndicatorSet,
    MediaDescriptor,
    MediaKind,
    SessionReport,
)
from backend_aiscan.analysis_engine.indicators import (
    indicators_for,
    is_power_of_two,
)
from backend_aiscan.analysis_engine.scorer import (
    INDICATOR_WEIGHTS,
    compute_element_confidence,
    compute_element_score,
    compute_indicators,
    score_element,
)
from backend_aiscan.analysis_engine.aggregator import PageAggregate, aggregate
from backend_aiscan.analysis_engine.descriptors import (
    descriptor_from_element,
    select_candidates,
)

__all__ = [
    "AnalysisStatus",
    "ElementResult",
    "IndicatorSet",
    "MediaDescriptor",
    "MediaKind",
    "SessionReport",
    "indicators_for",
    "is_power_of_two",
    "INDICATOR_WEIGHTS",
    "compute_element_confidence",
    "compute_element_score",
    "compute_indicators",
    "score_element",
    "PageAggregate",
    "aggregate",
    "descriptor_from_element",
    "select_candidates",
]
