"""Tests for image sizing and the image cache."""

import httpx

from inspirat.services.image_cache import InMemoryImageCache
from inspirat.services.images import ImageSizing


def test_full_image_url_uses_larger_dimension() -> None:
    sizing = ImageSizing(screen_width=1280, screen_height=2000)

    url = httpx.URL(sizing.full_image_url("https://images.test/photo-1"))

    assert url.host == "images.test"
    assert url.params["w"] == "2000"
    assert url.params["h"] == "2000"
    assert url.params["fit"] == "max"
    assert url.params["auto"] == "format"
    assert url.params["q"] == "80"


def test_full_image_url_applies_overrides() -> None:
    sizing = ImageSizing(screen_width=800, screen_height=600, quality=60)

    url = httpx.URL(sizing.full_image_url("https://images.test/p?ixid=abc", q=95))

    assert url.params["q"] == "95"
    assert url.params["ixid"] == "abc"
    assert url.params["w"] == "800"


def test_image_cache_evicts_least_recently_used() -> None:
    cache = InMemoryImageCache(max_entries=2)

    cache.put("a", b"1")
    cache.put("b", b"2")
    assert cache.get("a") == b"1"
    cache.put("c", b"3")

    assert "a" in cache
    assert "b" not in cache
    assert len(cache) == 2
