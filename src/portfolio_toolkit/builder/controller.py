"""
Module: builder.controller

Purpose:
    Orchestrate the complete portfolio build pipeline.
    Load -> Prefetch bitmaps -> Parse -> Paginate -> Render -> Write

Key Functions:
    - build_portfolio(): Main entry point for building a portfolio PDF

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - core.utils.serialization: Document loading
    - builder.images: Bitmap prefetch
    - builder.output: Layout, rendering, previews

Used By:
    - portfolio_toolkit.cli: Command line
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

from portfolio_toolkit.core.models import PortfolioDocument
from portfolio_toolkit.core.utils import DocumentLoadError, load_document

from .config import BuilderConfig
from .images import BitmapCache, DirectoryImageProvider, prefetch_bitmaps
from .layout import ElementKind, LayoutResult
from .output import plan_portfolio, render_portfolio, render_previews

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to the generated PDF
        page_count: Number of pages generated
        placeholder_count: Image blocks drawn as placeholders
        metadata: Build metadata dictionary
        warnings: Layout and image warnings
        preview_paths: PNG previews, if requested

    Example:
        >>> result = build_portfolio(config)
        >>> print(f"Generated {result.page_count} pages")
    """

    pdf_path: Path
    page_count: int
    placeholder_count: int
    metadata: dict
    warnings: tuple[str, ...]
    preview_paths: tuple[Path, ...] = ()


def build_portfolio(config: BuilderConfig) -> BuildResult:
    """
    Build a portfolio PDF from start to finish.

    Pipeline:
    1. Load the compiled document
    2. Prefetch bitmaps in parallel into a frozen cache
    3. Lay out sections onto pages
    4. Render to PDF and write it
    5. (Optional) Write PNG previews and build metadata

    Args:
        config: Build configuration

    Returns:
        BuildResult with paths and metadata

    Raises:
        BuildError: If the document cannot be loaded or output cannot be written
    """
    start_time = time.perf_counter()
    warnings: List[str] = []

    # 1. Load document
    try:
        document = load_document(config.document_path)
    except DocumentLoadError as e:
        raise BuildError(f"Failed to load document: {e}") from e

    logger.info(
        f"Building {config.theme.value} portfolio for {document.student_name!r} "
        f"({len(document.images)} images)"
    )

    # 2. Prefetch bitmaps
    bitmaps = _prefetch(document, config)

    # 3. Layout
    layout = plan_portfolio(document, config.theme, bitmaps, config.layout)
    warnings.extend(layout.warnings)
    placeholder_count = _placeholder_count(layout)
    if placeholder_count:
        warnings.append(f"{placeholder_count} image block(s) drawn as placeholders")

    # 4. Render and write
    pdf_bytes = render_portfolio(
        document,
        layout,
        config.theme,
        config.layout,
        show_footer=config.show_footer,
    )
    try:
        config.output_path.parent.mkdir(parents=True, exist_ok=True)
        config.output_path.write_bytes(pdf_bytes)
    except OSError as e:
        raise BuildError(f"Cannot write {config.output_path}: {e}") from e
    logger.info(f"Wrote portfolio PDF: {config.output_path}")

    # 5. Extras
    preview_paths: tuple[Path, ...] = ()
    if config.preview_dir is not None:
        try:
            preview_paths = tuple(
                render_previews(pdf_bytes, config.preview_dir, dpi=config.preview_dpi)
            )
        except OSError as e:
            raise BuildError(f"Cannot write previews to {config.preview_dir}: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Portfolio generation completed in {elapsed:.2f}s")

    metadata = _build_metadata(config, document, layout, placeholder_count, warnings, elapsed)
    if config.write_metadata:
        _write_metadata(config.output_path.with_name("build_metadata.json"), metadata)

    return BuildResult(
        pdf_path=config.output_path,
        page_count=layout.page_count,
        placeholder_count=placeholder_count,
        metadata=metadata,
        warnings=tuple(warnings),
        preview_paths=preview_paths,
    )


def _prefetch(document: PortfolioDocument, config: BuilderConfig) -> BitmapCache:
    if config.image_dir is None:
        logger.info("No image directory configured, all images render as placeholders")
        return BitmapCache.empty()
    if not config.image_dir.is_dir():
        logger.warning(f"Image directory not found: {config.image_dir}")
        return BitmapCache.empty()

    provider = DirectoryImageProvider(config.image_dir)
    return prefetch_bitmaps(document.images, provider, max_workers=config.max_workers)


def _placeholder_count(layout: LayoutResult) -> int:
    return sum(
        1 for placement in layout.placements_of(ElementKind.IMAGE)
        if placement.layout.is_placeholder
    )


def _build_metadata(
    config: BuilderConfig,
    document: PortfolioDocument,
    layout: LayoutResult,
    placeholder_count: int,
    warnings: List[str],
    elapsed: float,
) -> dict:
    """
    Build metadata dictionary for a generated portfolio.

    Returns:
        Metadata dictionary ready for JSON serialization

    Example:
        >>> metadata['theme']
        'modern'
    """
    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "student_name": document.student_name,
        "design_pattern": document.design_pattern_label,
        "theme": config.theme.value,
        "page_count": layout.page_count,
        "pair_count": layout.flow_index,
        "image_count": len(document.images),
        "placeholder_count": placeholder_count,
        "section_pages": {str(k): v for k, v in layout.section_page_map.items()},
        "warnings": list(warnings),
        "elapsed_seconds": round(elapsed, 3),
    }


def _write_metadata(path: Path, metadata: dict) -> None:
    try:
        path.write_text(json.dumps(metadata, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Cannot write {path}: {e}") from e
    logger.info(f"Wrote build metadata to {path}")
