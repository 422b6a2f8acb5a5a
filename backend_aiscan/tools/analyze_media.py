#!/usr/bin/env python3
"""
AIScan media analysis — score a page's media from a JSON snapshot.

Reads a JSON array of element snapshots (or {"media": [...]}) as produced by
a page script, selects candidates, runs one detection session, and prints
either the flat JSON payload (--json) or a console summary.

Exit codes: 0 success, 1 unreadable input, 2 report not successful.

Usage:
  py -m backend_aiscan.tools.analyze_media page_media.json
  py -m backend_aiscan.tools.analyze_media page_media.json --json --workers 8
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.analysis_engine.descriptors import DEFAULT_MIN_RENDERED_SIZE, select_candidates
from backend_aiscan.analysis_engine.models import SessionReport
from backend_aiscan.config.env import get_max_workers
from backend_aiscan.detection.report import (
    element_verdict,
    indicator_level,
    probability_band,
    significant_indicators,
    status_message,
    to_payload,
)
from backend_aiscan.detection.session import DetectionSession

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_NOT_ANALYZED = 2

SEP = "=" * 60
SEP_THIN = "-" * 60
SRC_DISPLAY_LEN = 50


def load_elements(path: Path) -> list[dict[str, Any]]:
    """Load element snapshots. Raises ValueError on a malformed document."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("media")
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of media elements or an object with a 'media' array")
    return [item for item in data if isinstance(item, dict)]


def _pct(value: float) -> str:
    return f"{round(value * 100)}%"


def _truncate(src: str) -> str:
    return src if len(src) <= SRC_DISPLAY_LEN else src[:SRC_DISPLAY_LEN] + "..."


def format_summary(report: SessionReport) -> str:
    """Console summary of a report (page figures, indicators, per-element lines)."""
    lines = [SEP, "  AIScan page analysis", SEP]
    if not report.success:
        lines.append(f"  Status: {report.status.value}")
        lines.append(f"  {status_message(report.status, report.error_message)}")
        lines.append(SEP)
        return "\n".join(lines)

    lines.append(f"  AI probability : {_pct(report.ai_probability)} ({probability_band(report.ai_probability)})")
    lines.append(f"  Confidence     : {_pct(report.confidence)}")
    lines.append(f"  Media analyzed : {report.media_count}")
    lines.append(SEP_THIN)
    for name, value in report.indicators.items():
        lines.append(f"  {name:<28} {_pct(value):>5}  {indicator_level(value)}")
    lines.append(SEP_THIN)
    for i, element in enumerate(report.elements, 1):
        d = element.descriptor
        verdict = element_verdict(element.ai_score)
        label = "Human" if verdict == "human" else "AI"
        lines.append(f"  [{i}] {d.kind.value} {d.size_label}  {label}: {_pct(element.ai_score)}")
        strong = significant_indicators(element)
        if strong:
            lines.append("      " + ", ".join(f"{n}: {_pct(v)}" for n, v in strong.items()))
        if d.source_url:
            lines.append(f"      {_truncate(d.source_url)}")
    lines.append(SEP)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Score page media for synthetic-content likelihood.")
    ap.add_argument("input", type=Path, help="JSON file with media element snapshots")
    ap.add_argument("--json", dest="as_json", action="store_true", help="Print the flat JSON payload")
    ap.add_argument("--workers", type=int, default=None, help="Scoring threads (default: AISCAN_MAX_WORKERS)")
    ap.add_argument(
        "--min-rendered-size",
        type=float,
        default=DEFAULT_MIN_RENDERED_SIZE,
        help="Skip images rendered smaller than this (px)",
    )
    args = ap.parse_args(argv)

    try:
        elements = load_elements(args.input)
    except (OSError, ValueError) as e:
        logger.error("analyze_media_bad_input", path=str(args.input), error=str(e))
        print(f"[analyze_media] Cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    workers = args.workers if args.workers is not None else get_max_workers()
    report = DetectionSession(max_workers=workers).run(
        lambda: select_candidates(elements, min_rendered_size=args.min_rendered_size)
    )

    if args.as_json:
        print(json.dumps(to_payload(report), indent=2))
    else:
        print(format_summary(report))
    return EXIT_OK if report.success else EXIT_NOT_ANALYZED


if __name__ == "__main__":
    raise SystemExit(main())
