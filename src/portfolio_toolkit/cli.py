"""
Module: cli

Purpose:
    Command line entry point: render a compiled portfolio document to PDF.

    portfolio-render DOCUMENT.json --theme elegant --images imgs/ --output out.pdf

Key Functions:
    - main(): Parse arguments, configure logging, run the build

Dependencies:
    - argparse (std)
    - builder.controller: Build pipeline

Used By:
    - `portfolio-render` console script
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from portfolio_toolkit import __version__
from portfolio_toolkit.builder import BuilderConfig, BuildError, build_portfolio
from portfolio_toolkit.builder.styles import available_themes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-render",
        description="Render a compiled portfolio document to a themed PDF",
    )
    parser.add_argument("document", type=Path, help="Compiled portfolio JSON document")
    parser.add_argument(
        "--theme",
        default="modern",
        choices=[theme.value for theme in available_themes()],
        help="Design theme (default: modern)",
    )
    parser.add_argument("--images", type=Path, default=None, help="Directory of <image id>.<ext> bitmaps")
    parser.add_argument("--output", "-o", type=Path, required=True, help="Output PDF path")
    parser.add_argument("--preview-dir", type=Path, default=None, help="Write PNG previews here")
    parser.add_argument("--workers", type=int, default=4, help="Concurrent image fetches")
    parser.add_argument("--no-footer", action="store_true", help="Omit page numbers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = BuilderConfig(
            document_path=args.document,
            output_path=args.output,
            theme=args.theme,
            image_dir=args.images,
            max_workers=args.workers,
            preview_dir=args.preview_dir,
            show_footer=not args.no_footer,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        result = build_portfolio(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    for warning in result.warnings:
        logger.warning(warning)
    print(f"{result.pdf_path} ({result.page_count} pages)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
