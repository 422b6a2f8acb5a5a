"""
Indicator library — heuristic synthetic-media signals from known metadata.

Each indicator maps one MediaDescriptor to a score in [0, 1]. Scores are
additive: every independent check that fires adds fixed partial credit, and
the sum is clamped to 1. Dimension checks only run when both width and
height are present and positive; otherwise they contribute nothing.

Reference tables are kept as shipped, duplicate entries included. A size
table hit credits once per table, however many entries repeat the pair.
"""

from __future__ import annotations

import re
from typing import Callable

from backend_aiscan.analysis_engine.models import MediaDescriptor, MediaKind

PERFECT_SYMMETRY = "Perfect Symmetry"
UNUSUAL_PATTERNS = "Unusual Patterns"
COLOR_CONSISTENCY = "Color Consistency"
TEXTURE_ANALYSIS = "Texture Analysis"
EDGE_DETECTION = "Edge Detection"
METADATA_ANALYSIS = "Metadata Analysis"
FILE_CHARACTERISTICS = "File Characteristics"
AI_ARTIFACTS = "AI Artifacts"
VIDEO_CHARACTERISTICS = "Video Characteristics"
PROCESSED_IMAGE_ANALYSIS = "Processed Image Analysis"

RATIO_TOLERANCE = 0.01
HIGH_RES = 2048

# (width, height) pairs; 1024x1024 and 512x512 appear twice
COMMON_AI_SIZES: tuple[tuple[int, int], ...] = (
    (512, 512), (1024, 1024), (768, 768), (512, 768),
    (1024, 768), (1920, 1080), (1080, 1920), (1536, 1536),
    (2048, 2048), (1024, 1024), (512, 512),
)
COMMON_AI_ASPECT_RATIOS: tuple[float, ...] = (1, 16 / 9, 4 / 3, 3 / 2, 5 / 4)
AI_EDGE_SIZES = frozenset({512, 768, 1024, 1536, 2048})
# Typical export/resize targets of editing and hosting pipelines
PROCESSED_SIZES = frozenset({800, 1200, 1600, 1920, 2560})
STANDARD_ASPECT_RATIOS: tuple[float, ...] = (1, 4 / 3, 3 / 4, 16 / 9, 9 / 16, 3 / 2, 2 / 3)

# 1920x1080 and 1280x720 appear twice
COMMON_AI_VIDEO_SIZES: tuple[tuple[int, int], ...] = (
    (1920, 1080), (1080, 1920), (1280, 720), (720, 1280),
    (1024, 1024), (512, 512), (768, 768), (1024, 576),
    (576, 1024), (1920, 1080), (1280, 720),
)
VIDEO_ASPECT_RATIOS: tuple[float, ...] = (16 / 9, 9 / 16, 1, 4 / 3, 21 / 9)
VIDEO_PLATFORM_KEYWORDS: tuple[str, ...] = (
    "runway", "pika", "sora", "synthesia", "heygen",
    "d-id", "kaiber", "genmo", "lumalabs",
)
MAX_CLIP_SECONDS = 60
SHORT_CLIP_SECONDS = 15

PROCESSING_KEYWORDS: tuple[str, ...] = (
    "resize", "crop", "thumb", "compressed", "optimized",
    "processed", "edited", "upscale", "enhanced", "filter",
)
IMAGE_HOST_DOMAINS: tuple[str, ...] = (
    "imgur.com", "cloudinary.com", "imgix.net", "unsplash.com", "pexels.com",
    "pixabay.com", "googleusercontent.com", "pinimg.com", "staticflickr.com",
    "discordapp.net",
)
BLOCK_DIVISORS: tuple[int, ...] = (256, 512, 1024)

AI_PLATFORMS: tuple[str, ...] = (
    "midjourney", "dall-e", "stable-diffusion", "generated",
    "ai-generated", "synthetic", "artificial", "picsum", "sample",
    "openai", "anthropic", "runway", "pika", "sora",
)
AI_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[a-f0-9]{32}"),
    re.compile(r"generated_\d+"),
    re.compile(r"ai_\d+"),
    re.compile(r"random=\d+"),
    re.compile(r"sample"),
    re.compile(r"dalle"),
    re.compile(r"midjourney"),
    re.compile(r"stable"),
)
AI_DOMAINS: tuple[str, ...] = (
    "openai.com", "anthropic.com", "midjourney.com", "stability.ai",
    "runwayml.com", "pika.art", "sora.openai.com",
)
AI_SIZE_STRINGS: tuple[str, ...] = (
    "512x512", "768x768", "1024x1024", "1536x1536", "2048x2048",
    "512x768", "768x512", "1024x768", "1920x1080", "1080x1920",
)


def is_power_of_two(n: object) -> bool:
    """True iff n is a positive integer with exactly one set bit."""
    if isinstance(n, bool) or not isinstance(n, int):
        return False
    return n > 0 and (n & (n - 1)) == 0


def _dims(descriptor: MediaDescriptor) -> tuple[float, float] | None:
    """Return (width, height) when both are positive numbers, else None."""
    w, h = descriptor.width, descriptor.height
    for v in (w, h):
        if isinstance(v, bool) or not isinstance(v, (int, float)) or v <= 0:
            return None
    return w, h


def _clamp(score: float) -> float:
    return min(score, 1.0)


def _credit(score: float, amount: float, times: int) -> float:
    # repeated addition, matches per-hit accumulation bit for bit
    for _ in range(times):
        score += amount
    return score


def _ratio_matches(ratio: float, targets: tuple[float, ...]) -> int:
    """Number of targets within RATIO_TOLERANCE of ratio (duplicates count)."""
    return sum(1 for r in targets if abs(ratio - r) < RATIO_TOLERANCE)


def _size_listed(w: float, h: float, sizes: tuple[tuple[int, int], ...]) -> bool:
    return any(w == sw and h == sh for sw, sh in sizes)


def _both_pow2(w: float, h: float) -> bool:
    return is_power_of_two(w) and is_power_of_two(h)


def _url_hits(url: str, needles: tuple[str, ...]) -> int:
    return sum(1 for needle in needles if needle in url)


def perfect_symmetry(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    ratio = w / h
    score = 0.0
    if abs(ratio - 1) < RATIO_TOLERANCE:
        score += 0.4
    if _both_pow2(w, h):
        score += 0.3
    if w >= HIGH_RES and h >= HIGH_RES and ratio == 1:
        score += 0.5
    return _clamp(score)


def unusual_patterns(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = _credit(0.0, 0.2, _ratio_matches(w / h, COMMON_AI_ASPECT_RATIOS))
    if _size_listed(w, h, COMMON_AI_SIZES):
        score += 0.3
    if w == 1024 and h == 1024:
        score += 0.4
    if w == 512 and h == 512:
        score += 0.3
    return _clamp(score)


def color_consistency(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = 0.0
    if w >= 1024 and h >= 1024:
        score += 0.3
    if w == 512 and h == 512:
        score += 0.4
    if w >= HIGH_RES or h >= HIGH_RES:
        score += 0.3
    if w == h and w >= 1024:
        score += 0.4
    return _clamp(score)


def texture_analysis(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = 0.0
    if w >= HIGH_RES or h >= HIGH_RES:
        score += 0.3
    if w == h:
        score += 0.2
    if _both_pow2(w, h):
        score += 0.3
    if w == 1536 and h == 1536:
        score += 0.4
    return _clamp(score)


def edge_detection(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = 0.0
    if w in AI_EDGE_SIZES and h in AI_EDGE_SIZES:
        score += 0.4
    if w == h:
        score += 0.3
    if w >= HIGH_RES or h >= HIGH_RES:
        score += 0.3
    if _both_pow2(w, h):
        score += 0.2
    return _clamp(score)


def ai_artifacts(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = 0.0
    if w >= HIGH_RES and h >= HIGH_RES:
        score += 0.4
    if _both_pow2(w, h) and w == h:
        score += 0.5
    if w in AI_EDGE_SIZES and h in AI_EDGE_SIZES:
        score += 0.4
    if w == 1024 and h == 1024:
        score += 0.5
    if w == 512 and h == 512:
        score += 0.4
    if w >= 1024 and h >= 1024:
        score += 0.3
    if w in PROCESSED_SIZES or h in PROCESSED_SIZES:
        score += 0.3
    score = _credit(score, 0.2, _ratio_matches(w / h, STANDARD_ASPECT_RATIOS))
    return _clamp(score)


def video_characteristics(descriptor: MediaDescriptor) -> float:
    """Video-only signals: frame size, clip duration, and generator platform in the URL."""
    score = 0.0
    dims = _dims(descriptor)
    if dims is not None:
        w, h = dims
        if _size_listed(w, h, COMMON_AI_VIDEO_SIZES):
            score += 0.4
        if w == h:
            score += 0.3
        if _both_pow2(w, h):
            score += 0.3
        if w >= HIGH_RES or h >= HIGH_RES:
            score += 0.4
        score = _credit(score, 0.2, _ratio_matches(w / h, VIDEO_ASPECT_RATIOS))
        if w == 1920 and h == 1080:
            score += 0.5
        if w == 1024 and h == 1024:
            score += 0.4

    duration = descriptor.duration_seconds
    if not isinstance(duration, bool) and isinstance(duration, (int, float)) and duration > 0:
        if duration % 5 == 0 and duration <= MAX_CLIP_SECONDS:
            score += 0.2
        if duration <= SHORT_CLIP_SECONDS:
            score += 0.3

    url = (descriptor.source_url or "").lower()
    score = _credit(score, 0.5, _url_hits(url, VIDEO_PLATFORM_KEYWORDS))
    return _clamp(score)


def processed_image_analysis(descriptor: MediaDescriptor) -> float:
    """Signals of resize/compression pipelines and image-host delivery."""
    score = 0.0
    dims = _dims(descriptor)
    if dims is not None:
        w, h = dims
        if w >= 1024 or h >= 1024:
            score += 0.3
        if w in PROCESSED_SIZES or h in PROCESSED_SIZES:
            score += 0.4
        score = _credit(score, 0.2, _ratio_matches(w / h, STANDARD_ASPECT_RATIOS))
        if w >= 800 and h >= 800:
            score += 0.3
        if w % 8 == 0 and h % 8 == 0:
            score += 0.2
        for divisor in BLOCK_DIVISORS:
            if w % divisor == 0 or h % divisor == 0:
                score += 0.3

    url = (descriptor.source_url or "").lower()
    score = _credit(score, 0.4, _url_hits(url, PROCESSING_KEYWORDS))
    score = _credit(score, 0.2, _url_hits(url, IMAGE_HOST_DOMAINS))
    return _clamp(score)


def metadata_analysis(descriptor: MediaDescriptor) -> float:
    """URL naming signals; independent of dimensions."""
    src = descriptor.source_url or ""
    lowered = src.lower()
    score = _credit(0.0, 0.4, _url_hits(lowered, AI_PLATFORMS))
    score = _credit(score, 0.3, sum(1 for pattern in AI_URL_PATTERNS if pattern.search(src)))
    score = _credit(score, 0.5, _url_hits(lowered, AI_DOMAINS))
    if "random=" in src:
        score += 0.2
    if "ai" in src or "generated" in src:
        score += 0.3
    score = _credit(score, 0.2, _url_hits(lowered, PROCESSING_KEYWORDS))
    score = _credit(score, 0.3, _url_hits(lowered, AI_SIZE_STRINGS))
    return _clamp(score)


def file_characteristics(descriptor: MediaDescriptor) -> float:
    dims = _dims(descriptor)
    if dims is None:
        return 0.0
    w, h = dims
    score = 0.0
    if _size_listed(w, h, COMMON_AI_SIZES):
        score += 0.4
    if _both_pow2(w, h):
        score += 0.3
    if w == h:
        score += 0.3
    if w >= HIGH_RES or h >= HIGH_RES:
        score += 0.3
    if w == 1024 and h == 1024:
        score += 0.5
    if w == 512 and h == 512:
        score += 0.4
    return _clamp(score)


IndicatorFn = Callable[[MediaDescriptor], float]

# Evaluation order; also the key order of every IndicatorSet
BASE_INDICATORS: tuple[tuple[str, IndicatorFn], ...] = (
    (PERFECT_SYMMETRY, perfect_symmetry),
    (UNUSUAL_PATTERNS, unusual_patterns),
    (COLOR_CONSISTENCY, color_consistency),
    (TEXTURE_ANALYSIS, texture_analysis),
    (EDGE_DETECTION, edge_detection),
    (METADATA_ANALYSIS, metadata_analysis),
    (FILE_CHARACTERISTICS, file_characteristics),
    (AI_ARTIFACTS, ai_artifacts),
)
VIDEO_INDICATORS: tuple[tuple[str, IndicatorFn], ...] = (
    (VIDEO_CHARACTERISTICS, video_characteristics),
)
COMMON_TAIL_INDICATORS: tuple[tuple[str, IndicatorFn], ...] = (
    (PROCESSED_IMAGE_ANALYSIS, processed_image_analysis),
)


def indicators_for(kind: MediaKind) -> tuple[tuple[str, IndicatorFn], ...]:
    """Indicator battery for a media kind; video adds Video Characteristics."""
    if kind is MediaKind.VIDEO:
        return BASE_INDICATORS + VIDEO_INDICATORS + COMMON_TAIL_INDICATORS
    return BASE_INDICATORS + COMMON_TAIL_INDICATORS
