"""
Module: builder.styles

Purpose:
    Style Catalog: the six named portfolio themes and the strategy
    types they are composed from.

Key Functions:
    - get_scheme(): Look up a DesignScheme by theme name
    - available_themes(): List theme names

Key Classes:
    - DesignScheme: Immutable theme bundle
    - ThemeName: Theme selection enum

Used By:
    - builder.layout: Geometry and pagination
    - builder.output: Rendering and assembly
"""

from .scheme import (
    ThemeName,
    BorderMode,
    HeaderChrome,
    FontSpec,
    Shadow,
    BorderStyle,
    NoBorder,
    SolidBorder,
    SubtleBorder,
    AccentBorder,
    LeftAccentBorder,
    TopBottomBorder,
    PageBackground,
    SolidBackground,
    RotatingBackground,
    DesignScheme,
)
from .catalog import get_scheme, available_themes, resolve_theme_name

__all__ = [
    # Scheme
    "ThemeName",
    "BorderMode",
    "HeaderChrome",
    "FontSpec",
    "Shadow",
    "BorderStyle",
    "NoBorder",
    "SolidBorder",
    "SubtleBorder",
    "AccentBorder",
    "LeftAccentBorder",
    "TopBottomBorder",
    "PageBackground",
    "SolidBackground",
    "RotatingBackground",
    "DesignScheme",
    # Catalog
    "get_scheme",
    "available_themes",
    "resolve_theme_name",
]
