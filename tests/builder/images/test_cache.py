"""
Tests for builder.images.cache

Test Coverage:
- BitmapCache: Read-only lookups gated by the id validity predicate
- prefetch_bitmaps(): Distinct valid ids only, failures degrade to misses
"""
import threading
import pytest
from PIL import Image

from portfolio_toolkit.builder.images import (
    BitmapCache,
    ImageNotFoundError,
    ImageProvider,
    MappingImageProvider,
    prefetch_bitmaps,
)
from portfolio_toolkit.core.models import ImageReference


class RecordingProvider(ImageProvider):
    """Provider that records every id it is asked for."""

    def __init__(self, bitmap, failing=()):
        self.bitmap = bitmap
        self.failing = set(failing)
        self.requested = []
        self._lock = threading.Lock()

    def get_bitmap(self, image_id):
        with self._lock:
            self.requested.append(image_id)
        if image_id in self.failing:
            raise ImageNotFoundError(image_id)
        return self.bitmap


class ExplodingProvider(ImageProvider):
    def get_bitmap(self, image_id):
        raise ConnectionError("storage offline")


def _id(n: int) -> str:
    return f"{n:024d}"


class TestBitmapCache:
    """Tests for BitmapCache."""

    def test_is_read_only(self, sample_bitmap):
        cache = BitmapCache({_id(1): sample_bitmap})

        with pytest.raises(TypeError):
            cache[_id(2)] = sample_bitmap  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak_in(self, sample_bitmap):
        source = {_id(1): sample_bitmap}
        cache = BitmapCache(source)
        source[_id(2)] = sample_bitmap

        assert len(cache) == 1

    def test_invalid_ids_always_miss(self, sample_bitmap):
        cache = BitmapCache({"missing-1": sample_bitmap})

        assert "missing-1" in cache
        assert cache.get_bitmap("missing-1") is None
        assert cache.get_bitmap(None) is None


class TestPrefetchBitmaps:
    """Tests for prefetch_bitmaps()."""

    def test_fetches_each_distinct_valid_id_once(self, sample_bitmap):
        # Arrange
        images = [
            ImageReference(_id(1)),
            ImageReference(_id(1)),
            ImageReference(_id(2)),
            ImageReference("fallback-000000000000001"),
            ImageReference("short"),
        ]
        provider = RecordingProvider(sample_bitmap)

        # Act
        cache = prefetch_bitmaps(images, provider, max_workers=3)

        # Assert
        assert sorted(provider.requested) == [_id(1), _id(2)]
        assert set(cache) == {_id(1), _id(2)}

    def test_failed_fetch_is_left_out(self, sample_bitmap):
        provider = RecordingProvider(sample_bitmap, failing={_id(2)})

        cache = prefetch_bitmaps([ImageReference(_id(1)), ImageReference(_id(2))], provider)

        assert cache.get_bitmap(_id(1)) is sample_bitmap
        assert cache.get_bitmap(_id(2)) is None

    def test_unexpected_provider_errors_do_not_abort(self):
        cache = prefetch_bitmaps([ImageReference(_id(1))], ExplodingProvider())
        assert len(cache) == 0

    def test_no_valid_ids_returns_empty_cache_without_fetching(self, sample_bitmap):
        provider = RecordingProvider(sample_bitmap)

        cache = prefetch_bitmaps([ImageReference("missing-x")], provider)

        assert len(cache) == 0
        assert provider.requested == []

    def test_when_max_workers_not_positive_then_raises(self):
        with pytest.raises(ValueError):
            prefetch_bitmaps([], MappingImageProvider({}), max_workers=0)

    def test_works_with_mapping_provider(self):
        bitmap = Image.new("RGB", (10, 10))
        cache = prefetch_bitmaps([ImageReference(_id(7))], MappingImageProvider({_id(7): bitmap}))

        assert cache.get_bitmap(_id(7)) is bitmap

    def test_custom_provider_bitmaps_are_cached_in_drawable_mode(self):
        provider = RecordingProvider(Image.new("CMYK", (10, 10)))

        cache = prefetch_bitmaps([ImageReference(_id(8))], provider)

        assert cache.get_bitmap(_id(8)).mode == "RGBA"
