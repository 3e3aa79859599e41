"""Photo collection cache with stale-while-revalidate refreshes."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from inspirat.adapters.photo_source_client import PhotoSource
from inspirat.domain.errors import SourceUnavailable, StaleRefreshFailed
from inspirat.domain.photos import CollectionCacheEntry, PhotoCollection

COLLECTION_CACHE_KEY = "photoCollection"
CLIENT_NAME_KEY = "name"

_COLLECTION_ADAPTER = TypeAdapter(PhotoCollection)

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable per-client key-value storage."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def keys(self) -> set[str]:
        """Return all stored keys."""

    def set(self, key: str, value: object) -> None:
        """Store a JSON-compatible value under a key."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CollectionCacheManager:
    """Serves the photo collection from the store, refreshing it when stale.

    A missing entry is fetched on the caller's path. A stale entry is returned
    as-is while a background task refetches it. Concurrent writers are not
    coordinated; the last write wins.
    """

    source: PhotoSource
    store: KeyValueStore
    ttl: timedelta
    clock: Callable[[], datetime] = _utcnow
    on_refresh_error: Callable[[StaleRefreshFailed], None] | None = None
    _refresh_task: "asyncio.Task[None] | None" = field(
        default=None, init=False, repr=False
    )

    async def get_collection(self) -> PhotoCollection:
        """Return the cached collection, fetching it when nothing is cached."""
        entry = self._read_entry()
        if entry is None:
            _logger.debug("Collection cache empty.")
            entry = await self._fetch_entry(previous=None)
            self._persist(entry)
            return list(entry.photos)

        age = self.clock() - entry.updated_at
        if age >= self.ttl:
            _logger.debug("Collection cache stale (age=%s), refreshing.", age)
            self._schedule_refresh(entry)
        return list(entry.photos)

    async def wait_for_refresh(self) -> None:
        """Wait for an in-flight background refresh, if any."""
        task = self._refresh_task
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    def read_client_name(self) -> str | None:
        """Return the stored client identity, if one exists."""
        try:
            name = self.store.get(CLIENT_NAME_KEY)
        except Exception as exc:
            _logger.warning("Unable to read client name: %s", exc)
            return None
        if isinstance(name, str) and name:
            return name
        return None

    def _read_entry(self) -> CollectionCacheEntry | None:
        try:
            if COLLECTION_CACHE_KEY not in self.store.keys():
                return None
            raw = self.store.get(COLLECTION_CACHE_KEY)
        except Exception as exc:
            _logger.warning("Treating unreadable store as a cache miss: %s", exc)
            return None
        if raw is None:
            return None
        try:
            return CollectionCacheEntry.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Ignoring unreadable collection cache: %s", exc)
            return None

    async def _fetch_entry(
        self, previous: CollectionCacheEntry | None
    ) -> CollectionCacheEntry:
        try:
            payload = await self.source.fetch_collection()
            photos = _COLLECTION_ADAPTER.validate_python(payload)
        except Exception as exc:
            raise SourceUnavailable(f"Failed to fetch photo collection: {exc}") from exc
        if not photos:
            raise SourceUnavailable("Photo source returned an empty collection")
        _logger.debug("Fetched %s photos.", len(photos))

        updated_at = self.clock()
        if previous is not None and previous.updated_at > updated_at:
            updated_at = previous.updated_at
        return CollectionCacheEntry(photos=photos, updated_at=updated_at)

    def _persist(self, entry: CollectionCacheEntry) -> None:
        try:
            self.store.set(COLLECTION_CACHE_KEY, entry.to_payload())
        except Exception as exc:
            _logger.warning("Keeping collection in memory only: %s", exc)

    def _schedule_refresh(self, entry: CollectionCacheEntry) -> None:
        if self._refresh_task is not None and not self._refresh_task.done():
            return
        self._refresh_task = asyncio.get_running_loop().create_task(
            self._refresh(entry)
        )

    async def _refresh(self, previous: CollectionCacheEntry) -> None:
        try:
            entry = await self._fetch_entry(previous)
        except SourceUnavailable as exc:
            failure = StaleRefreshFailed(str(exc))
            failure.__cause__ = exc
            _logger.warning("Background collection refresh failed: %s", exc)
            if self.on_refresh_error is not None:
                self.on_refresh_error(failure)
            return
        self._persist(entry)
