"""
Module: builder

Purpose:
    Portfolio building pipeline. Turns a compiled portfolio document
    and a theme into a paginated PDF.

Key Functions:
    - build_portfolio(): File-to-file build (load, prefetch, render, write)
    - assemble_portfolio(): In-memory document -> PDF bytes
    - plan_portfolio(): In-memory document -> LayoutResult

Key Classes:
    - BuilderConfig: Configuration for building
    - LayoutConfig: Page geometry
    - ThemeName / DesignScheme: Theme selection

Dependencies:
    - reportlab: PDF generation
    - PIL: Bitmaps
    - fitz (PyMuPDF): Previews
"""

from .config import BuilderConfig
from .controller import build_portfolio, BuildResult, BuildError
from .layout import LayoutConfig, LayoutResult
from .output import assemble_portfolio, plan_portfolio
from .styles import DesignScheme, ThemeName, get_scheme

__all__ = [
    # Config
    "BuilderConfig",
    "LayoutConfig",
    # Themes
    "DesignScheme",
    "ThemeName",
    "get_scheme",
    # Controller
    "build_portfolio",
    "BuildResult",
    "BuildError",
    # Assembly
    "assemble_portfolio",
    "plan_portfolio",
    "LayoutResult",
]
