"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from inspirat.adapters.image_loader import ImageLoader
from inspirat.adapters.photo_source_client import PhotoSource
from inspirat.config import Settings
from inspirat.containers import AppContainer
from inspirat.domain.errors import ImageLoadError, PersistenceWriteFailed
from inspirat.services.collection import CollectionCacheManager, KeyValueStore
from inspirat.services.images import ImageSizing
from inspirat.services.preload import NeighborPreloader
from inspirat.services.session import RotationSession

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def photo_payload(count: int, prefix: str = "photo") -> list[dict[str, object]]:
    """Build raw photo records as the remote source returns them."""
    return [
        {
            "id": f"{prefix}-{i}",
            "color": f"#{i:06x}",
            "urls": {"full": f"https://images.test/{prefix}-{i}"},
        }
        for i in range(count)
    ]


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    data: dict[str, object] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    fail_writes: bool = False
    read_error: Exception | None = None

    def get(self, key: str) -> object | None:
        if self.read_error is not None:
            raise self.read_error
        return self.data.get(key)

    def keys(self) -> set[str]:
        if self.read_error is not None:
            raise self.read_error
        return set(self.data)

    def set(self, key: str, value: object) -> None:
        if self.fail_writes:
            raise PersistenceWriteFailed("store is read-only")
        self.writes.append(key)
        self.data[key] = value


@dataclass
class FakePhotoSource(PhotoSource):
    """Photo source returning a fixed payload or raising an error."""

    payload: list[dict[str, object]] = field(default_factory=lambda: photo_payload(5))
    error: Exception | None = None
    calls: int = 0

    async def fetch_collection(self) -> list[dict[str, object]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeImageLoader(ImageLoader):
    """Image loader that records URLs and fails for selected ones."""

    loaded: list[str] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)

    async def load(self, url: str) -> None:
        self.loaded.append(url)
        if url in self.failing:
            raise ImageLoadError(url, "broken")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="development",
        storage_backend="file",
        storage_path=str(tmp_path / "store.json"),
        cache_ttl="4h",
        screen_width=1280,
        screen_height=800,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def photo_source() -> FakePhotoSource:
    return FakePhotoSource()


@pytest.fixture
def image_loader() -> FakeImageLoader:
    return FakeImageLoader()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    photo_source: FakePhotoSource,
    image_loader: FakeImageLoader,
) -> AppContainer:
    image_sizing = ImageSizing(
        screen_width=settings.screen_width,
        screen_height=settings.screen_height,
        quality=settings.image_quality,
    )
    collection_manager = CollectionCacheManager(
        source=photo_source,
        store=store,
        ttl=settings.cache_ttl,
        clock=FixedClock(),
    )
    preloader = NeighborPreloader(loader=image_loader)
    rotation_session = RotationSession(
        collection_manager=collection_manager,
        preloader=preloader,
        client_name=settings.client_name,
        clock=FixedClock(),
    )

    async def close_resources() -> None:
        await rotation_session.wait_for_background()

    return AppContainer(
        settings=settings,
        store=store,
        image_sizing=image_sizing,
        collection_manager=collection_manager,
        preloader=preloader,
        rotation_session=rotation_session,
        close_resources=close_resources,
    )
