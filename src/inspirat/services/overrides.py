"""Development-only overrides applied on top of the rotation state."""

from collections.abc import Mapping
from dataclasses import dataclass

from inspirat.domain.photos import PhotoRecord, PhotoUrls, RotationState
from inspirat.services.rotation import normalize_index

_TRUE_VALUES = {"1", "true", "yes"}


@dataclass(frozen=True)
class SplashView:
    """What the presentation layer should display."""

    photo: PhotoRecord
    index: int
    total: int
    show_swatch: bool = False


@dataclass(frozen=True)
class DevOverrides:
    """Manual index, image source and swatch overrides for debugging."""

    index: int | None = None
    src: str | None = None
    swatch: bool = False

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "DevOverrides":
        """Parse overrides from query string parameters."""
        index = None
        try:
            index = int(params["index"])
        except (KeyError, ValueError):
            pass
        return cls(
            index=index,
            src=params.get("src") or None,
            swatch=params.get("swatch", "").lower() in _TRUE_VALUES,
        )

    def apply(self, state: RotationState | None) -> SplashView | None:
        """Return the view for state with these overrides applied."""
        if self.src:
            photo = PhotoRecord(id="SRC", color="black", urls=PhotoUrls(full=self.src))
            total = len(state.collection) if state else 1
            index = normalize_index(state.index, total) if state else 0
            return SplashView(photo, index, total, self.swatch)
        if state is None or not state.collection:
            return None
        total = len(state.collection)
        index = normalize_index(
            self.index if self.index is not None else state.index, total
        )
        return SplashView(state.collection[index], index, total, self.swatch)
