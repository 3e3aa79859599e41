"""View session that turns the cached collection into a rotation state."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from inspirat.domain.errors import ImageLoadError, InspiratError
from inspirat.domain.photos import PhotoRecord, RotationState
from inspirat.services.collection import CollectionCacheManager
from inspirat.services.preload import NeighborPreloader
from inspirat.services.rotation import current_photo, day_index, step
from inspirat.services.shuffle import shuffle

_logger = logging.getLogger(__name__)


class SessionStatus(StrEnum):
    """Lifecycle of a rotation session."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RotationSession:
    """Loads, orders and navigates the photo collection for one viewer.

    A failed load is not retried; call mount() again to retry.
    """

    collection_manager: CollectionCacheManager
    preloader: NeighborPreloader
    client_name: str | None = None
    clock: Callable[[], datetime] = _utcnow
    status: SessionStatus = SessionStatus.UNINITIALIZED
    state: RotationState | None = None
    _preloads: "set[asyncio.Task[None]]" = field(
        default_factory=set, init=False, repr=False
    )

    async def mount(self) -> RotationState | None:
        """Load the collection and select today's photo."""
        self.status = SessionStatus.LOADING
        try:
            photos = await self.collection_manager.get_collection()
        except InspiratError:
            _logger.exception("Unable to load photo collection")
            self.status = SessionStatus.FAILED
            self.state = None
            return None

        seed = self.client_name or self.collection_manager.read_client_name()
        ordered = shuffle(photos, seed)
        index = day_index(ordered, self.clock())
        _logger.debug("Loaded %s photos. Initial index: %s.", len(ordered), index)
        self._set_state(RotationState(collection=tuple(ordered), index=index))
        return self.state

    async def ensure_mounted(self) -> RotationState | None:
        """Mount once; later calls return the existing state."""
        if self.status == SessionStatus.UNINITIALIZED:
            return await self.mount()
        return self.state

    def step(self, delta: int) -> RotationState:
        """Move forward or backward through the collection."""
        if self.state is None:
            raise RuntimeError("Rotation session is not ready")
        self._set_state(step(self.state, delta))
        return self.state

    def current_photo(self) -> PhotoRecord | None:
        """Return the photo to display, if the session is ready."""
        if self.state is None:
            return None
        return current_photo(self.state)

    async def wait_for_background(self) -> None:
        """Wait for preloads and any collection refresh to settle."""
        if self._preloads:
            await asyncio.gather(*self._preloads, return_exceptions=True)
        await self.preloader.wait_for_pending()
        await self.collection_manager.wait_for_refresh()

    def _set_state(self, state: RotationState) -> None:
        self.state = state
        self.status = SessionStatus.READY
        task = asyncio.get_running_loop().create_task(self._preload(state))
        self._preloads.add(task)
        task.add_done_callback(self._preloads.discard)

    async def _preload(self, state: RotationState) -> None:
        _logger.debug("Preloading photos.")
        try:
            await self.preloader.preload(state.collection, state.index)
        except ImageLoadError as exc:
            _logger.warning("Next photo preload failed: %s", exc)
            return
        _logger.debug("Finished preloading photos.")
