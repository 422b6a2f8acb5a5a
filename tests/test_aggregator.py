"""
Tests for page aggregation (analysis_engine.aggregator).
"""

from __future__ import annotations

import itertools

import pytest

from backend_aiscan.analysis_engine import indicators as ind
from backend_aiscan.analysis_engine.aggregator import aggregate, average_indicators, page_confidence
from backend_aiscan.analysis_engine.models import ElementResult, freeze_indicators
from backend_aiscan.analysis_engine.scorer import score_element


def _result(descriptor, indicators, ai_score, confidence=0.7):
    return ElementResult(
        descriptor=descriptor,
        indicators=freeze_indicators(indicators),
        ai_score=ai_score,
        confidence=confidence,
    )


def test_aggregate_empty_raises():
    with pytest.raises(ValueError):
        aggregate([])


def test_single_element(image):
    page = aggregate([score_element(image(1024, 1024))])
    assert page.ai_probability == pytest.approx(1.5 / 1.95)
    # score confidence 0.8 (> 0.5), element confidence 0.6
    assert page.confidence == pytest.approx(0.7)


def test_three_elements_confidence(image):
    results = [_result(image(), {"x": 0.1}, 0.2) for _ in range(3)]
    page = aggregate(results)
    # score confidence 0.6, element confidence min(0.9, 0.8)
    assert page.confidence == pytest.approx((0.6 + 0.8) / 2)


def test_element_confidence_capped():
    assert page_confidence(0.9, 10) == pytest.approx((0.8 + 0.9) / 2)
    assert page_confidence(0.5, 1) == pytest.approx((0.6 + 0.6) / 2)


def test_video_only_indicator_averaged_over_videos(image, video):
    results = [
        _result(image(), {ind.PERFECT_SYMMETRY: 0.4}, 0.3),
        _result(video(), {ind.PERFECT_SYMMETRY: 0.8, ind.VIDEO_CHARACTERISTICS: 0.6}, 0.5),
        _result(image(), {ind.PERFECT_SYMMETRY: 0.0}, 0.1),
    ]
    averaged = average_indicators(results)
    assert averaged[ind.PERFECT_SYMMETRY] == pytest.approx(0.4)
    assert averaged[ind.VIDEO_CHARACTERISTICS] == pytest.approx(0.6)


def test_aggregate_order_independent(image, video):
    descriptors = [
        image(1024, 1024),
        image(1000, 667, source_url="https://i.imgur.com/thumb.jpg"),
        video(1920, 1080, duration_seconds=10),
        image(512, 768, source_url="https://example.com/midjourney_ai_1.png"),
    ]
    results = [score_element(d) for d in descriptors]
    baseline = aggregate(results)
    for perm in itertools.permutations(results):
        page = aggregate(list(perm))
        assert page.ai_probability == baseline.ai_probability
        assert page.confidence == baseline.confidence
        assert dict(page.indicators) == dict(baseline.indicators)
