"""
Render a Storyfolio story (YAML or JSON) into a printable landscape PDF.

Usage:
    python scripts/render_story_pdf.py \
        --story lost_kingdom.yaml \
        --output exports/ \
        --theme parchment
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from tqdm.auto import tqdm

# Ensure project root is on the Python path.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from storyfolio import Story, StoryfolioError, StoryPDFExporter, THEMES  # noqa: E402
from storyfolio.common import load_settings  # noqa: E402
from storyfolio.pdf_generation import PAGE_SIZES, ImageLoader  # noqa: E402


class ProgressTracker:
    """
    Command-line progress updates for a story export.
    """

    def __init__(self) -> None:
        self._page_bar: tqdm | None = None

    def __call__(self, stage: str, payload: Dict[str, Any]) -> None:
        match stage:
            case "export:start":
                total = payload.get("total_pages", 0)
                self._write(f"Composing '{payload.get('title')}' ({total} pages + title page)...")
                self._page_bar = tqdm(total=total, desc="Folios", unit="page")
            case "page:processing":
                if self._page_bar is not None:
                    self._page_bar.set_description(f"Folio {payload.get('page_number')}")
            case "page:done":
                if self._page_bar is not None:
                    self._page_bar.update(1)
            case "export:complete":
                self.close()
                failures = payload.get("artwork_failures", 0)
                if failures:
                    self._write(f"{failures} page(s) used placeholder artwork.")

    def close(self) -> None:
        if self._page_bar is not None:
            self._page_bar.close()
            self._page_bar = None

    @staticmethod
    def _write(message: str) -> None:
        tqdm.write(message)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert a Storyfolio story file into a print-ready PDF."
    )
    parser.add_argument(
        "--story",
        required=True,
        help="Path to the story file (.yaml, .yml or .json).",
    )
    parser.add_argument(
        "--output",
        default=".",
        help="Destination PDF path or directory (default: current directory).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=(
            f"Theme preset ({', '.join(sorted(THEMES))}) or a YAML theme file. "
            "Defaults to STORYFOLIO_THEME or 'chronicle'."
        ),
    )
    parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES.keys()),
        default="a4",
        help="Landscape page size to render (default: a4).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for downloading artwork (default: STORYFOLIO_IMAGE_TIMEOUT or 30).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    timeout = args.timeout if args.timeout is not None else settings.image_timeout

    tracker = ProgressTracker()
    try:
        story = Story.from_file(args.story)
        exporter = StoryPDFExporter(
            args.theme,
            page_size=PAGE_SIZES[args.page_size],
            image_loader=ImageLoader(request_timeout=timeout),
            settings=settings,
            progress_callback=tracker,
        )
        path, result = exporter.export_to_path(story, args.output)
    except (StoryfolioError, ValueError, OSError) as exc:
        tracker.close()
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1

    print(f"Rendered {result.page_count}-page PDF to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
