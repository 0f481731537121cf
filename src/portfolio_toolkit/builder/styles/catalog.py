"""
Module: builder.styles.catalog

Purpose:
    The fixed catalog of six portfolio themes. Each theme is one
    DesignScheme value composed from the strategies in scheme.py.

Key Functions:
    - get_scheme(): Look up a theme by name
    - available_themes(): All theme names in catalog order

Used By:
    - builder.output.assembler: Theme selection
    - portfolio_toolkit.cli: --theme choices
"""

from __future__ import annotations

from typing import Union

from .scheme import (
    AccentBorder,
    DesignScheme,
    FontSpec,
    HeaderChrome,
    LeftAccentBorder,
    NoBorder,
    RotatingBackground,
    Shadow,
    SolidBackground,
    SolidBorder,
    SubtleBorder,
    ThemeName,
    TopBottomBorder,
)


MODERN = DesignScheme(
    name=ThemeName.MODERN,
    accent="#2563EB",
    accent_secondary="#7C3AED",
    background=RotatingBackground(("#F8FAFC", "#EEF2FF")),
    card_background="#FFFFFF",
    section_background="#E0E7FF",
    text_color="#0F172A",
    secondary_text_color="#475569",
    title_font=FontSpec("Helvetica-Bold", 26),
    section_font=FontSpec("Helvetica-Bold", 16),
    body_font=FontSpec("Helvetica", 11),
    corner_radius=12,
    shadow=Shadow(offset_x=0, offset_y=3, blur=6, opacity=0.15),
    image_spacing=20,
    text_spacing=20,
    section_spacing=30,
    border=AccentBorder(),
    border_width=1.5,
    header=HeaderChrome.BANNER,
)

CLASSIC = DesignScheme(
    name=ThemeName.CLASSIC,
    accent="#7C2D12",
    accent_secondary="#B45309",
    background=SolidBackground("#FDFBF7"),
    card_background="#FFFFFF",
    section_background="#F5EFE6",
    text_color="#1C1917",
    secondary_text_color="#57534E",
    title_font=FontSpec("Times-Bold", 26),
    section_font=FontSpec("Times-Bold", 17),
    body_font=FontSpec("Times-Roman", 12),
    corner_radius=4,
    shadow=None,
    image_spacing=18,
    text_spacing=18,
    section_spacing=28,
    border=SolidBorder(use_secondary_accent=True),
    border_width=1,
    header=HeaderChrome.BANNER,
)

ELEGANT = DesignScheme(
    name=ThemeName.ELEGANT,
    accent="#4C1D95",
    accent_secondary="#C9A227",
    background=RotatingBackground(("#FAF7F2", "#F3EEF8")),
    card_background="#FFFFFF",
    section_background="#EDE7F6",
    text_color="#1F1B24",
    secondary_text_color="#6B5B7B",
    title_font=FontSpec("Times-Bold", 28),
    section_font=FontSpec("Times-BoldItalic", 17),
    body_font=FontSpec("Times-Roman", 12, line_height_ratio=1.45),
    corner_radius=10,
    shadow=Shadow(offset_x=0, offset_y=4, blur=8, opacity=0.12),
    image_spacing=24,
    text_spacing=22,
    section_spacing=32,
    border=TopBottomBorder(),
    border_width=1.5,
    header=HeaderChrome.OVERLAY,
)

VIBRANT = DesignScheme(
    name=ThemeName.VIBRANT,
    accent="#DB2777",
    accent_secondary="#F59E0B",
    background=RotatingBackground(("#FFF1F2", "#FEF3C7", "#ECFEFF")),
    card_background="#FFFFFF",
    section_background="#FCE7F3",
    text_color="#1F2937",
    secondary_text_color="#4B5563",
    title_font=FontSpec("Helvetica-Bold", 28),
    section_font=FontSpec("Helvetica-Bold", 17),
    body_font=FontSpec("Helvetica", 11),
    corner_radius=16,
    shadow=Shadow(offset_x=2, offset_y=4, blur=10, opacity=0.2),
    image_spacing=20,
    text_spacing=20,
    section_spacing=30,
    border=LeftAccentBorder(bar_width=6),
    border_width=2,
    header=HeaderChrome.BANNER,
)

MINIMAL = DesignScheme(
    name=ThemeName.MINIMAL,
    accent="#111827",
    accent_secondary="#6B7280",
    background=SolidBackground("#FFFFFF"),
    card_background="#FFFFFF",
    section_background="#FFFFFF",
    text_color="#111827",
    secondary_text_color="#6B7280",
    title_font=FontSpec("Helvetica-Bold", 24),
    section_font=FontSpec("Helvetica-Bold", 14),
    body_font=FontSpec("Helvetica", 11),
    corner_radius=0,
    shadow=None,
    image_spacing=16,
    text_spacing=16,
    section_spacing=24,
    border=NoBorder(),
    border_width=0.75,
    header=HeaderChrome.RULE,
)

PROFESSIONAL = DesignScheme(
    name=ThemeName.PROFESSIONAL,
    accent="#0F4C81",
    accent_secondary="#4B5563",
    background=SolidBackground("#F7F9FC"),
    card_background="#FFFFFF",
    section_background="#E8EEF5",
    text_color="#1A202C",
    secondary_text_color="#4A5568",
    title_font=FontSpec("Helvetica-Bold", 24),
    section_font=FontSpec("Helvetica-Bold", 15),
    body_font=FontSpec("Helvetica", 10.5, line_height_ratio=1.4),
    corner_radius=6,
    shadow=Shadow(offset_x=0, offset_y=2, blur=4, opacity=0.1),
    image_spacing=18,
    text_spacing=18,
    section_spacing=26,
    border=SubtleBorder(),
    border_width=1,
    header=HeaderChrome.BANNER,
)


_CATALOG: dict[ThemeName, DesignScheme] = {
    scheme.name: scheme
    for scheme in (MODERN, CLASSIC, ELEGANT, VIBRANT, MINIMAL, PROFESSIONAL)
}


def available_themes() -> list[ThemeName]:
    """All theme names in catalog order."""
    return list(_CATALOG)


def resolve_theme_name(value: Union[ThemeName, str]) -> ThemeName:
    """
    Normalize a theme selection to a ThemeName.

    Args:
        value: ThemeName or case-insensitive theme string

    Returns:
        Matching ThemeName

    Raises:
        ValueError: If no theme has that name
    """
    if isinstance(value, ThemeName):
        return value
    try:
        return ThemeName(str(value).strip().lower())
    except ValueError:
        names = ", ".join(t.value for t in ThemeName)
        raise ValueError(f"Unknown theme {value!r}; expected one of: {names}") from None


def get_scheme(value: Union[ThemeName, str]) -> DesignScheme:
    """
    Get the DesignScheme for a theme.

    Example:
        >>> get_scheme("minimal").border_mode
        <BorderMode.NONE: 'none'>
    """
    return _CATALOG[resolve_theme_name(value)]
