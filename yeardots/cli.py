"""
Command-line export.

Writes the requested images plus a progress.json metadata file into the
output directory:

    year-dots                          # square, story and og PNGs
    year-dots --preset story --ext jpg --quality 85 --tz Europe/Prague
    year-dots --width 800 --height 800 --date 2025-03-01
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

from yeardots import config
from yeardots.errors import YearDotsError
from yeardots.export import ImageExport, export_image
from yeardots.logging_config import setup_logging
from yeardots.progress import YearProgress, compute_year_progress
from yeardots.scene import PRESETS

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="year-dots",
        description="Render the year-progress dot chart as PNG or JPEG.",
    )
    parser.add_argument(
        "--preset", choices=[*PRESETS, "all"], default="all",
        help="output size preset (default: all)",
    )
    parser.add_argument("--width", type=int, help="custom width; overrides --preset")
    parser.add_argument("--height", type=int, help="custom height; overrides --preset")
    parser.add_argument("--ext", choices=["png", "jpg", "jpeg"], default="png")
    parser.add_argument(
        "--quality", type=int, default=None,
        help=f"JPEG quality (default: $YEAR_DOTS_QUALITY or {config.DEFAULT_QUALITY})",
    )
    parser.add_argument("--tz", default=None, help="IANA time zone (default: $YEAR_DOTS_TZ or local)")
    parser.add_argument("--date", type=_parse_date, default=None, help="render for this date instead of today")
    parser.add_argument("--output-dir", type=Path, default=None, help="default: $OUTPUT_DIR or ./public")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def export_progress(progress: YearProgress, now: datetime, output_dir: Path) -> Path:
    """Save progress metadata as JSON. Returns the written path."""
    meta = {
        "generated_at": now.isoformat(),
        **progress.to_dict(),
    }
    meta_path = output_dir / "progress.json"
    meta_path.write_text(json.dumps(meta, indent=2))
    print(f"  Metadata:  {meta_path}")
    return meta_path


def _collect_exports(args: argparse.Namespace, progress: YearProgress, quality: int) -> List[ImageExport]:
    if args.width is not None or args.height is not None:
        if args.width is None or args.height is None:
            raise ValueError("--width and --height must be given together")
        return [export_image(progress, width=args.width, height=args.height, fmt=args.ext, quality=quality)]

    names = list(PRESETS) if args.preset == "all" else [args.preset]
    return [export_image(progress, name, fmt=args.ext, quality=quality) for name in names]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    now = datetime.now()
    output_dir = args.output_dir or config.output_dir()
    time_zone = args.tz if args.tz is not None else config.time_zone()

    try:
        quality = config.clamp_quality(args.quality) if args.quality is not None else config.jpeg_quality()
        progress = compute_year_progress(args.date or now, time_zone)
        print(f"Year {progress.year}: {progress.header_text} ({progress.percent_text})")

        output_dir.mkdir(parents=True, exist_ok=True)
        for item in _collect_exports(args, progress, quality):
            path = output_dir / item.filename
            path.write_bytes(item.data)
            print(f"  Wrote: {path}")

        export_progress(progress, now, output_dir)
    except (YearDotsError, ValueError, OSError) as exc:
        logger.debug("Export failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
