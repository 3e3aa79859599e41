"""Tests for neighbor preloading."""

import asyncio

import httpx
import pytest

from inspirat.domain.errors import ImageLoadError
from inspirat.domain.photos import PhotoRecord
from inspirat.services.preload import NeighborPreloader
from tests.conftest import FakeImageLoader, photo_payload

URL = "https://images.test/photo-{}"


def _collection(count: int) -> list[PhotoRecord]:
    return [PhotoRecord.model_validate(p) for p in photo_payload(count)]


def _run(preloader: NeighborPreloader, collection: list[PhotoRecord], index: int):
    async def scenario() -> None:
        try:
            await preloader.preload(collection, index)
        finally:
            await preloader.wait_for_pending()

    asyncio.run(scenario())


def test_preload_loads_next_and_previous() -> None:
    loader = FakeImageLoader()
    preloader = NeighborPreloader(loader=loader)

    _run(preloader, _collection(3), 1)

    assert set(loader.loaded) == {URL.format(2), URL.format(0)}


def test_preload_wraps_negative_index() -> None:
    loader = FakeImageLoader()
    preloader = NeighborPreloader(loader=loader)

    _run(preloader, _collection(3), -1)

    assert set(loader.loaded) == {URL.format(0), URL.format(1)}


def test_preload_rejects_when_next_fails() -> None:
    loader = FakeImageLoader(failing={URL.format(2)})
    preloader = NeighborPreloader(loader=loader)

    with pytest.raises(ImageLoadError):
        _run(preloader, _collection(3), 1)

    assert URL.format(0) in loader.loaded


def test_preload_ignores_previous_failure() -> None:
    loader = FakeImageLoader(failing={URL.format(0)})
    preloader = NeighborPreloader(loader=loader)

    _run(preloader, _collection(3), 1)

    assert set(loader.loaded) == {URL.format(2), URL.format(0)}


def test_preload_uses_url_builder() -> None:
    loader = FakeImageLoader()
    preloader = NeighborPreloader(loader=loader, url_builder=lambda url: url + "?w=10")

    _run(preloader, _collection(3), 0)

    assert URL.format(1) + "?w=10" in loader.loaded


def test_preload_wraps_unexpected_loader_errors() -> None:
    class BrokenLoader:
        async def load(self, url: str) -> None:
            raise OSError("disk full")

    preloader = NeighborPreloader(loader=BrokenLoader())

    with pytest.raises(ImageLoadError) as excinfo:
        _run(preloader, _collection(2), 0)

    assert isinstance(excinfo.value.__cause__, OSError)


def test_preload_wraps_url_builder_errors() -> None:
    def reject(url: str) -> str:
        raise httpx.InvalidURL(f"Invalid URL: {url}")

    loader = FakeImageLoader()
    preloader = NeighborPreloader(loader=loader, url_builder=reject)

    with pytest.raises(ImageLoadError) as excinfo:
        _run(preloader, _collection(3), 1)

    assert excinfo.value.url == URL.format(2)
    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)
    assert loader.loaded == []
