"""
Tests for builder.styles

Test Coverage:
- get_scheme() / resolve_theme_name(): Lookup by enum and string
- Border strategies: padding per mode
- Background strategies: rotation by flow index
"""
import pytest

from portfolio_toolkit.builder.styles import (
    BorderMode,
    HeaderChrome,
    LeftAccentBorder,
    RotatingBackground,
    SolidBackground,
    SolidBorder,
    ThemeName,
    available_themes,
    get_scheme,
    resolve_theme_name,
)


class TestCatalog:
    """Tests for the theme catalog."""

    def test_catalog_has_exactly_six_themes(self):
        assert [t.value for t in available_themes()] == [
            "modern", "classic", "elegant", "vibrant", "minimal", "professional",
        ]

    @pytest.mark.parametrize("theme", list(ThemeName))
    def test_every_theme_has_scheme_with_matching_name(self, theme):
        assert get_scheme(theme).name is theme

    def test_resolve_accepts_case_insensitive_strings(self):
        assert resolve_theme_name("  Elegant ") is ThemeName.ELEGANT

    def test_resolve_when_unknown_then_raises(self):
        with pytest.raises(ValueError, match="Unknown theme"):
            resolve_theme_name("neon")

    def test_header_chrome_per_theme(self):
        # Arrange / Act
        chrome = {theme: get_scheme(theme).header for theme in ThemeName}

        # Assert
        assert chrome[ThemeName.MINIMAL] is HeaderChrome.RULE
        assert chrome[ThemeName.ELEGANT] is HeaderChrome.OVERLAY
        others = set(ThemeName) - {ThemeName.MINIMAL, ThemeName.ELEGANT}
        assert all(chrome[t] is HeaderChrome.BANNER for t in others)

    def test_border_modes_cover_all_variants(self):
        modes = {get_scheme(theme).border_mode for theme in ThemeName}
        assert modes == set(BorderMode)

    def test_only_classic_uses_secondary_accent_outline(self):
        border = get_scheme(ThemeName.CLASSIC).border
        assert isinstance(border, SolidBorder)
        assert border.use_secondary_accent

    def test_display_name_is_capitalized(self):
        assert get_scheme("professional").display_name == "Professional"


class TestBorderPadding:
    """Tests for border strategy padding."""

    @pytest.mark.parametrize("theme", list(ThemeName))
    def test_vertical_padding_is_twenty(self, theme):
        assert get_scheme(theme).border.vertical_padding == 20

    @pytest.mark.parametrize("theme", list(ThemeName))
    def test_horizontal_padding_is_wider_only_for_left_accent(self, theme):
        border = get_scheme(theme).border
        expected = 30 if isinstance(border, LeftAccentBorder) else 20
        assert border.horizontal_padding == expected


class TestBackgrounds:
    """Tests for background strategies."""

    def test_rotating_background_cycles_by_flow_index(self):
        bg = RotatingBackground(("#111111", "#222222", "#333333"))

        assert [bg.color_for(i) for i in range(5)] == [
            "#111111", "#222222", "#333333", "#111111", "#222222",
        ]

    def test_solid_background_ignores_flow_index(self):
        bg = SolidBackground("#FFFFFF")
        assert bg.color_for(0) == bg.color_for(7) == "#FFFFFF"

    def test_rotating_background_requires_colors(self):
        with pytest.raises(ValueError):
            RotatingBackground(())

    def test_scheme_background_for_delegates_to_strategy(self):
        scheme = get_scheme(ThemeName.VIBRANT)
        assert scheme.background_for(3) == scheme.background_for(0)
        assert scheme.background_for(1) != scheme.background_for(0)
