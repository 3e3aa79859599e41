"""Errors raised by the rotation core."""


class InspiratError(RuntimeError):
    """Base class for photo rotation failures."""


class SourceUnavailable(InspiratError):
    """Remote fetch failed and no cached collection exists."""


class StaleRefreshFailed(InspiratError):
    """Background revalidation of a stale collection failed."""


class ImageLoadError(InspiratError):
    """A photo could not be preloaded."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        message = f"Failed to load image: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PersistenceWriteFailed(InspiratError):
    """Writing to the key-value store failed."""


class PersistenceReadFailed(InspiratError):
    """Reading from the key-value store failed."""
