"""
Unit tests for the page flow engine.

Test Coverage:
- Orphan heading avoidance
- Split rules for first and later pairs that do not fit
- image_first alternation and flow index monotonicity
- Background rotation on new pages
- Overflow of blocks taller than a page
"""
import pytest

from portfolio_toolkit.builder.images import ImageResolver
from portfolio_toolkit.builder.layout import (
    ElementKind,
    FlowSection,
    LayoutConfig,
    PaginationContext,
    flow_section,
    is_image_first,
    measure_header,
    measure_section_title,
    measure_text_block,
    paginate,
)
from portfolio_toolkit.builder.styles import get_scheme
from portfolio_toolkit.core.models import ContentPair, ImageItem, TextItem

# Resolver with no images: every image token is a placeholder of default height
NO_IMAGES = ImageResolver([])


def text_pair(text: str = "Some words about the work.") -> ContentPair:
    return ContentPair(text=(TextItem(text),), image=None)


def image_pair(index: int = 0, text: str = "") -> ContentPair:
    items = (TextItem(text),) if text else ()
    return ContentPair(text=items, image=ImageItem(index))


def assert_no_orphan_headings(result):
    """Every heading shares its page with its section's first pair."""
    for page in result.pages:
        for heading in page.placements_of(ElementKind.HEADING):
            following = [
                p for p in page.placements
                if p.section_index == heading.section_index and p.pair_index == 0
            ]
            has_pairs = any(
                p.section_index == heading.section_index and p.pair_index is not None
                for p in result.placements_of(ElementKind.TEXT) + result.placements_of(ElementKind.IMAGE)
            )
            if has_pairs:
                assert following, f"heading orphaned on page {page.index}"


class TestBasicFlow:
    """Tests for simple layouts."""

    def test_scenario_single_section_single_page(self):
        # Arrange
        scheme = get_scheme("minimal")
        sections = [FlowSection("Math", (text_pair("Great progress this term."),))]

        # Act
        result = paginate(sections, NO_IMAGES, scheme, LayoutConfig())

        # Assert
        assert result.page_count == 1
        headings = result.placements_of(ElementKind.HEADING)
        assert [h.layout.title for h in headings] == ["Math"]
        assert result.placements_of(ElementKind.IMAGE) == []
        assert result.warnings == []

    def test_no_sections_still_yields_one_page(self):
        result = paginate([], NO_IMAGES, get_scheme("modern"), LayoutConfig())

        assert result.page_count == 1
        assert result.pages[0].is_empty

    def test_header_is_placed_first_at_top_margin(self):
        scheme = get_scheme("modern")
        config = LayoutConfig()
        header = measure_header("Ada", "General Portfolio", config.content_width, scheme)

        result = paginate([FlowSection("A", (text_pair(),))], NO_IMAGES, scheme, config, header=header)

        first = result.pages[0].placements[0]
        assert first.kind == ElementKind.HEADER
        assert first.top == config.margin_top
        assert result.pages[0].placements[1].top == pytest.approx(config.margin_top + header.height)

    def test_placements_are_contiguous(self):
        sections = [FlowSection("A", (text_pair(), image_pair(0), text_pair()))]

        result = paginate(sections, NO_IMAGES, get_scheme("classic"), LayoutConfig())

        placements = result.pages[0].placements
        for above, below in zip(placements, placements[1:]):
            assert below.top == pytest.approx(above.bottom)

    def test_empty_section_draws_heading_alone(self):
        sections = [FlowSection("Empty"), FlowSection("Blank", (text_pair("   "),))]

        result = paginate(sections, NO_IMAGES, get_scheme("modern"), LayoutConfig())

        assert len(result.placements_of(ElementKind.HEADING)) == 2
        assert result.total_placements == 2
        assert result.flow_index == 0


class TestImageFirst:
    """Tests for image/text alternation."""

    def test_odd_flow_index_is_image_first(self):
        assert [is_image_first(i) for i in range(4)] == [False, True, False, True]

    def test_second_section_first_pair_draws_image_first(self):
        # Arrange
        config = LayoutConfig(default_image_height=80)
        sections = [
            FlowSection("One", (image_pair(0, "first"),)),
            FlowSection("Two", (image_pair(1, "second"),)),
        ]

        # Act
        result = paginate(sections, NO_IMAGES, get_scheme("minimal"), config)

        # Assert
        assert result.page_count == 1
        by_section = {}
        for p in result.pages[0].placements:
            if p.pair_index is not None:
                by_section.setdefault(p.section_index, []).append(p.kind)
        assert by_section[0] == [ElementKind.TEXT, ElementKind.IMAGE]
        assert by_section[1] == [ElementKind.IMAGE, ElementKind.TEXT]


class TestFlowIndex:
    """Tests for flow index bookkeeping."""

    def test_flow_index_counts_pairs_across_pages(self):
        # Arrange: 12 placeholder pairs cannot fit on one page
        pairs = tuple(image_pair(i, f"caption {i}") for i in range(12))
        sections = [FlowSection("A", pairs[:5]), FlowSection("B", pairs[5:])]

        # Act
        result = paginate(sections, NO_IMAGES, get_scheme("modern"), LayoutConfig())

        # Assert
        assert result.page_count > 1
        assert result.flow_index == 12
        assert_no_orphan_headings(result)

    def test_section_page_map_tracks_pages(self):
        pairs = tuple(image_pair(i) for i in range(6))

        result = paginate([FlowSection("A", pairs)], NO_IMAGES, get_scheme("modern"), LayoutConfig())

        assert result.section_page_map[0] == list(range(result.page_count))


class TestOrphanHeading:
    """Tests for keeping a heading with its first pair."""

    def test_when_heading_fits_but_first_pair_does_not_then_moves_heading(self):
        # Arrange
        scheme = get_scheme("modern")
        config = LayoutConfig()
        ctx = PaginationContext.begin(config, scheme)
        filler = measure_text_block("filler", config.content_width, scheme)
        ctx.place(filler)
        title = measure_section_title("Late", config.content_width, scheme)
        # Leave room for the heading but not for heading + placeholder
        ctx.cursor_y = config.page_bottom - title.height - 10

        # Act
        flow_section(ctx, 0, FlowSection("Late", (image_pair(0),)), NO_IMAGES)
        result = ctx.finish()

        # Assert
        assert result.page_count == 2
        assert result.pages[0].placements_of(ElementKind.HEADING) == []
        assert [p.kind for p in result.pages[1].placements] == [ElementKind.HEADING, ElementKind.IMAGE]
        assert result.pages[1].placements[0].top == config.margin_top

    def test_heading_stays_when_pair_fits(self):
        scheme = get_scheme("modern")
        config = LayoutConfig()
        ctx = PaginationContext.begin(config, scheme)
        ctx.place(measure_text_block("filler", config.content_width, scheme))

        flow_section(ctx, 0, FlowSection("Fits", (text_pair(),)), NO_IMAGES)

        assert ctx.finish().page_count == 1


class TestSplitRules:
    """Tests for pairs that do not fit in the remaining space."""

    def test_oversized_first_pair_keeps_first_element_with_heading(self):
        # Arrange: placeholder alone is taller than a page
        config = LayoutConfig(default_image_height=700)
        scheme = get_scheme("modern")
        sections = [FlowSection("Huge", (image_pair(0, "intro text"),))]

        # Act
        result = paginate(sections, NO_IMAGES, scheme, config)

        # Assert
        first_page = [p.kind for p in result.pages[0].placements]
        assert first_page == [ElementKind.HEADING, ElementKind.TEXT]
        assert [p.kind for p in result.pages[1].placements] == [ElementKind.IMAGE]
        assert result.flow_index == 1
        assert len(result.warnings) == 1
        assert "overflows" in result.warnings[0]
        assert_no_orphan_headings(result)

    def test_oversized_first_pair_after_header_still_keeps_heading_with_content(self):
        config = LayoutConfig(default_image_height=700)
        scheme = get_scheme("elegant")
        header = measure_header("Ada", "Elegant Portfolio", config.content_width, scheme)

        result = paginate(
            [FlowSection("Huge", (image_pair(0, "intro"),))], NO_IMAGES, scheme, config, header=header,
        )

        assert [p.kind for p in result.pages[0].placements] == [ElementKind.HEADER]
        assert_no_orphan_headings(result)

    def test_later_pair_splits_each_element_onto_fresh_page(self):
        # Arrange
        config = LayoutConfig(default_image_height=400)
        scheme = get_scheme("modern")
        sections = [FlowSection("A", (image_pair(0), image_pair(1, "caption")))]

        # Act
        result = paginate(sections, NO_IMAGES, scheme, config)

        # Assert: pair 1 has odd flow index, so image then text
        assert result.page_count == 3
        assert [p.kind for p in result.pages[1].placements] == [ElementKind.IMAGE]
        assert [p.kind for p in result.pages[2].placements] == [ElementKind.TEXT]
        assert result.pages[1].placements[0].top == config.margin_top
        assert result.flow_index == 2

    def test_later_single_element_pair_moves_to_new_page(self):
        config = LayoutConfig(default_image_height=400)

        result = paginate(
            [FlowSection("A", (image_pair(0), image_pair(1)))], NO_IMAGES, get_scheme("minimal"), config,
        )

        assert result.page_count == 2
        assert [p.pair_index for p in result.pages[1].placements] == [1]


class TestBackgrounds:
    """Tests for page background selection."""

    def test_first_page_uses_rotation_index_zero(self):
        scheme = get_scheme("vibrant")

        result = paginate([], NO_IMAGES, scheme, LayoutConfig())

        assert result.pages[0].background == scheme.background_for(0)

    def test_new_page_background_follows_flow_index(self):
        # Arrange
        config = LayoutConfig(default_image_height=400)
        scheme = get_scheme("modern")
        sections = [FlowSection("A", (image_pair(0), image_pair(1, "caption")))]

        # Act
        result = paginate(sections, NO_IMAGES, scheme, config)

        # Assert: pages 1 and 2 both start while pair 1 (flow index 1) is placed
        assert [page.background for page in result.pages] == [
            scheme.background_for(0),
            scheme.background_for(1),
            scheme.background_for(1),
        ]

    def test_solid_background_never_changes(self):
        scheme = get_scheme("professional")
        pairs = tuple(image_pair(i) for i in range(8))

        result = paginate([FlowSection("A", pairs)], NO_IMAGES, scheme, LayoutConfig())

        assert {page.background for page in result.pages} == {scheme.background_for(0)}


class TestPaginationContext:
    """Tests for PaginationContext."""

    def test_start_new_page_on_empty_page_is_noop(self):
        ctx = PaginationContext.begin(LayoutConfig(), get_scheme("modern"))

        ctx.start_new_page()
        ctx.start_new_page()

        assert ctx.page_index == 0
        assert ctx.finish().page_count == 1

    def test_place_advances_cursor(self):
        config = LayoutConfig()
        scheme = get_scheme("modern")
        ctx = PaginationContext.begin(config, scheme)
        block = measure_text_block("hello", config.content_width, scheme)

        placement = ctx.place(block)

        assert placement.top == config.margin_top
        assert ctx.cursor_y == pytest.approx(config.margin_top + block.height)
        assert ctx.remaining_height == pytest.approx(config.available_height - block.height)
