"""
Module: builder.config

Purpose:
    Configuration dataclass for the portfolio build pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building a portfolio PDF

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - portfolio_toolkit.cli: Command line
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from portfolio_toolkit.builder.images.cache import DEFAULT_MAX_WORKERS
from portfolio_toolkit.builder.layout import LayoutConfig
from portfolio_toolkit.builder.output.preview import DEFAULT_PREVIEW_DPI
from portfolio_toolkit.builder.styles import ThemeName, resolve_theme_name


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building a portfolio (immutable).

    Attributes:
        document_path: JSON document produced by the content compiler
        output_path: Where to write the PDF
        theme: Theme name (string values are normalized to ThemeName)
        image_dir: Directory with `<image id>.<ext>` bitmaps (None = no bitmaps)
        max_workers: Upper bound on concurrent bitmap fetches
        layout: Page layout configuration
        show_footer: Draw page numbers in the bottom margin
        preview_dir: Optional directory for PNG previews of every page
        preview_dpi: Preview resolution
        write_metadata: Write build_metadata.json next to the PDF

    Example:
        >>> config = BuilderConfig(
        ...     document_path=Path("portfolio.json"),
        ...     output_path=Path("out/portfolio.pdf"),
        ...     theme="elegant",
        ... )
    """

    # Required
    document_path: Path
    output_path: Path

    # Appearance
    theme: ThemeName = ThemeName.MODERN
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    show_footer: bool = True

    # Images
    image_dir: Optional[Path] = None
    max_workers: int = DEFAULT_MAX_WORKERS

    # Extras
    preview_dir: Optional[Path] = None
    preview_dpi: int = DEFAULT_PREVIEW_DPI
    write_metadata: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "theme", resolve_theme_name(self.theme))
        object.__setattr__(self, "document_path", Path(self.document_path))
        object.__setattr__(self, "output_path", Path(self.output_path))
        if self.image_dir is not None:
            object.__setattr__(self, "image_dir", Path(self.image_dir))
        if self.preview_dir is not None:
            object.__setattr__(self, "preview_dir", Path(self.preview_dir))

        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")
        if self.preview_dpi <= 0:
            raise ValueError(f"preview_dpi must be positive: {self.preview_dpi}")
        if self.output_path.suffix.lower() != ".pdf":
            raise ValueError(f"output_path must end in .pdf: {self.output_path}")
