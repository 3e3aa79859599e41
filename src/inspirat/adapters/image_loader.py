"""Image loading into the local image cache."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from inspirat.domain.errors import ImageLoadError
from inspirat.services.image_cache import ImageCache, InMemoryImageCache


class ImageLoader(Protocol):
    """Interface for loading an image so later displays are instant."""

    async def load(self, url: str) -> None:
        """Load the image at url, raising ImageLoadError on failure."""


@dataclass
class HttpxImageLoader(ImageLoader):
    """Downloads images with httpx and keeps their bytes in an ImageCache."""

    http_client: httpx.AsyncClient
    cache: ImageCache

    @classmethod
    def create(cls, max_entries: int = 8) -> "HttpxImageLoader":
        """Create an image loader with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True),
            cache=InMemoryImageCache(max_entries=max_entries),
        )

    async def load(self, url: str) -> None:
        """Download an image unless it is already cached."""
        if url in self.cache:
            return
        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageLoadError(url, str(exc)) from exc
        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/"):
            raise ImageLoadError(url, f"unexpected content type {content_type!r}")
        self.cache.put(url, response.content)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
