"""Bounded cache for preloaded image bytes."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Protocol


class ImageCache(Protocol):
    """Cache interface for loaded images keyed by URL."""

    def get(self, url: str) -> bytes | None:
        """Return cached image bytes if present."""

    def put(self, url: str, content: bytes) -> None:
        """Store image bytes for a URL."""

    def __contains__(self, url: object) -> bool:
        """Return True when the URL is cached."""


@dataclass
class InMemoryImageCache(ImageCache):
    """Least-recently-used image cache held in process memory."""

    max_entries: int = 8
    _entries: "OrderedDict[str, bytes]" = field(
        default_factory=OrderedDict, init=False, repr=False
    )

    def get(self, url: str) -> bytes | None:
        """Return cached bytes and mark the URL as recently used."""
        content = self._entries.get(url)
        if content is not None:
            self._entries.move_to_end(url)
        return content

    def put(self, url: str, content: bytes) -> None:
        """Store bytes, evicting the least recently used entries."""
        self._entries[url] = content
        self._entries.move_to_end(url)
        while len(self._entries) > max(self.max_entries, 1):
            self._entries.popitem(last=False)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
