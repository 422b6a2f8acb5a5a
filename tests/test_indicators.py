"""
Tests for the indicator library (analysis_engine.indicators).

Golden values use dimensions and URLs whose checks can be counted by hand.
"""

from __future__ import annotations

import pytest

from backend_aiscan.analysis_engine import indicators as ind
from backend_aiscan.analysis_engine.models import MediaDescriptor, MediaKind

ALL_INDICATORS = ind.BASE_INDICATORS + ind.VIDEO_INDICATORS + ind.COMMON_TAIL_INDICATORS

SAMPLE_DESCRIPTORS = [
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="https://x/img.png", width=1024, height=1024),
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="https://x/a.png", width=2048, height=2048),
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="https://x/a.png", width=512, height=512),
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="https://x/photo.jpg", width=1000, height=667),
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="", width=None, height=None),
    MediaDescriptor(kind=MediaKind.IMAGE, source_url="", width=0, height=300),
    MediaDescriptor(
        kind=MediaKind.IMAGE,
        source_url=(
            "https://cdn.midjourney.com/generated_12/ai_3/sample-dalle-stable-1024x1024"
            "-resize-crop-thumb.png?random=4&h=0123456789abcdef0123456789abcdef"
        ),
        width=4096,
        height=4096,
    ),
    MediaDescriptor(
        kind=MediaKind.VIDEO,
        source_url="https://runway.sora.pika.example/clip.mp4",
        width=1024,
        height=1024,
        duration_seconds=10,
    ),
]


@pytest.mark.parametrize("descriptor", SAMPLE_DESCRIPTORS)
def test_every_indicator_in_unit_interval(descriptor):
    for name, fn in ALL_INDICATORS:
        value = fn(descriptor)
        assert 0.0 <= value <= 1.0, name


@pytest.mark.parametrize("n", [1, 2, 4, 8, 1024, 2048])
def test_is_power_of_two_true(n):
    assert ind.is_power_of_two(n) is True


@pytest.mark.parametrize("n", [0, 3, 6, -4, 1000, 2.0, True, None])
def test_is_power_of_two_false(n):
    assert ind.is_power_of_two(n) is False


def test_golden_1024_square_image(image):
    """1024x1024: symmetry 0.4 + 0.3, unusual patterns 0.2 + 0.3 + 0.4."""
    d = image(1024, 1024)
    assert ind.perfect_symmetry(d) == pytest.approx(0.7)
    assert ind.unusual_patterns(d) == pytest.approx(0.9)
    assert ind.color_consistency(d) == pytest.approx(0.7)
    assert ind.texture_analysis(d) == pytest.approx(0.5)
    assert ind.edge_detection(d) == pytest.approx(0.9)
    assert ind.metadata_analysis(d) == 0.0
    assert ind.file_characteristics(d) == 1.0
    assert ind.ai_artifacts(d) == 1.0
    assert ind.processed_image_analysis(d) == 1.0


def test_high_res_square_symmetry_bonus(image):
    assert ind.perfect_symmetry(image(2048, 2048)) == 1.0
    assert ind.perfect_symmetry(image(1000, 1000)) == pytest.approx(0.4)


def test_dimension_indicators_zero_without_dimensions(image):
    for d in (image(None, None), image(1024, None), image(0, 1024)):
        assert ind.perfect_symmetry(d) == 0.0
        assert ind.unusual_patterns(d) == 0.0
        assert ind.color_consistency(d) == 0.0
        assert ind.texture_analysis(d) == 0.0
        assert ind.edge_detection(d) == 0.0
        assert ind.file_characteristics(d) == 0.0
        assert ind.ai_artifacts(d) == 0.0


def test_metadata_platform_keyword_without_dimensions(image):
    """'midjourney' alone reaches 0.4 from the platform list."""
    d = image(None, None, source_url="https://example.com/midjourney.png")
    assert ind.metadata_analysis(d) >= 0.4


def test_metadata_case_insensitive_platform(image):
    d = image(None, None, source_url="https://example.com/MidJourney.png")
    assert ind.metadata_analysis(d) >= 0.4


def test_metadata_plain_url_scores_zero(image):
    assert ind.metadata_analysis(image(source_url="https://example.com/photo.jpg")) == 0.0


def test_metadata_random_query(image):
    """random=<n> adds pattern 0.3, literal 0.2."""
    d = image(source_url="https://example.com/p.jpg?random=7")
    assert ind.metadata_analysis(d) == pytest.approx(0.5)


def test_processed_url_keywords_without_dimensions(image):
    d = image(None, None, source_url="https://i.imgur.com/thumb_resize.jpg")
    # thumb + resize -> 0.8, imgur.com -> 0.2
    assert ind.processed_image_analysis(d) == 1.0
    d2 = image(None, None, source_url="https://i.imgur.com/x.jpg")
    assert ind.processed_image_analysis(d2) == pytest.approx(0.2)


def test_processed_size_signals(image):
    # >=1024 0.3; 1200 in processed sizes 0.4; no ratio; >=800 0.3; %8 0.2
    d = image(1200, 1000, source_url="")
    assert ind.processed_image_analysis(d) == 1.0
    # 808x808: ratio 1 -> 0.2; >=800 0.3; %8 0.2
    assert ind.processed_image_analysis(image(808, 808, source_url="")) == pytest.approx(0.7)


def test_video_characteristics_duration_and_platform(video):
    no_dims = video(None, None, source_url="https://example.com/v.mp4", duration_seconds=10)
    # multiple of 5 and <= 60 -> 0.2; <= 15 -> 0.3
    assert ind.video_characteristics(no_dims) == pytest.approx(0.5)
    long_clip = video(None, None, source_url="https://example.com/v.mp4", duration_seconds=61)
    assert ind.video_characteristics(long_clip) == 0.0
    platform = video(None, None, source_url="https://cdn.Runway.example/v.mp4")
    assert ind.video_characteristics(platform) == pytest.approx(0.5)


def test_video_characteristics_1080p(video):
    # size table 0.4 + ratio 16/9 0.2 + exact 1920x1080 0.5
    d = video(1920, 1080, source_url="https://example.com/v.mp4")
    assert ind.video_characteristics(d) == pytest.approx(1.0)


def test_indicators_for_kind():
    image_names = [name for name, _ in ind.indicators_for(MediaKind.IMAGE)]
    video_names = [name for name, _ in ind.indicators_for(MediaKind.VIDEO)]
    assert ind.VIDEO_CHARACTERISTICS not in image_names
    assert ind.VIDEO_CHARACTERISTICS in video_names
    assert image_names[-1] == ind.PROCESSED_IMAGE_ANALYSIS
    assert video_names[-1] == ind.PROCESSED_IMAGE_ANALYSIS
    assert len(image_names) == 9
    assert len(video_names) == 10


def test_reference_tables_keep_duplicates():
    assert len(ind.COMMON_AI_SIZES) == 11
    assert ind.COMMON_AI_SIZES.count((1024, 1024)) == 2
    assert ind.COMMON_AI_SIZES.count((512, 512)) == 2
    assert len(ind.COMMON_AI_VIDEO_SIZES) == 11


def test_ai_artifacts_processed_size_and_ratio(image):
    # 1200 in processed sizes 0.3; ratio 4/3 0.2
    assert ind.ai_artifacts(image(1200, 900)) == pytest.approx(0.5)


def test_metadata_processing_keyword_and_size_string(image):
    # resize 0.2; 768x768 0.3
    d = image(None, None, source_url="https://e.com/x-resize-768x768.png")
    assert ind.metadata_analysis(d) == pytest.approx(0.5)


def test_color_consistency_high_res_non_square(image):
    # both >= 1024 0.3; either >= 2048 0.3
    assert ind.color_consistency(image(2560, 1440)) == pytest.approx(0.6)


def test_unusual_patterns_non_square_table_size(image):
    # ratio 16/9 0.2; listed size 0.3
    assert ind.unusual_patterns(image(1920, 1080)) == pytest.approx(0.5)
