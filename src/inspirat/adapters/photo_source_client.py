"""Remote photo collection client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class PhotoSource(Protocol):
    """Interface for reading the full photo collection."""

    async def fetch_collection(self) -> list[dict[str, object]]:
        """Return the raw ordered photo records."""


@dataclass
class HttpxPhotoSourceClient(PhotoSource):
    """Reads the collection JSON document straight from the object store."""

    collection_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, collection_url: str) -> "HttpxPhotoSourceClient":
        """Create a source client with a managed httpx session."""
        return cls(collection_url=collection_url, http_client=httpx.AsyncClient())

    async def fetch_collection(self) -> list[dict[str, object]]:
        """Fetch the collection document."""
        response = await self.http_client.get(self.collection_url)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise RuntimeError("Photo collection document is not a list")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
