"""Neighbor photo preloading."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from inspirat.adapters.image_loader import ImageLoader
from inspirat.domain.errors import ImageLoadError
from inspirat.domain.photos import PhotoRecord
from inspirat.services.rotation import normalize_index

_logger = logging.getLogger(__name__)


def _unchanged(url: str) -> str:
    return url


@dataclass
class NeighborPreloader:
    """Warms the image cache for the photos around the current index."""

    loader: ImageLoader
    url_builder: Callable[[str], str] = _unchanged
    _pending: "set[asyncio.Task[None]]" = field(
        default_factory=set, init=False, repr=False
    )

    async def preload(self, collection: Sequence[PhotoRecord], index: int) -> None:
        """Load the next photo and start loading the previous one.

        Resolves when the next photo has loaded and raises ImageLoadError if it
        fails. The previous photo loads in the background and its outcome is
        only logged.
        """
        length = len(collection)
        next_photo = collection[normalize_index(index + 1, length)]
        previous_photo = collection[normalize_index(index - 1, length)]

        task = asyncio.get_running_loop().create_task(
            self._preload_quietly(previous_photo)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        await self._load(next_photo)

    async def wait_for_pending(self) -> None:
        """Wait for background preloads to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _preload_quietly(self, photo: PhotoRecord) -> None:
        try:
            await self._load(photo)
        except ImageLoadError as exc:
            _logger.warning("Previous photo preload failed: %s", exc)

    async def _load(self, photo: PhotoRecord) -> None:
        url = photo.urls.full
        try:
            url = self.url_builder(url)
            await self.loader.load(url)
        except ImageLoadError:
            raise
        except Exception as exc:
            raise ImageLoadError(url, str(exc)) from exc
