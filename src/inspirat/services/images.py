"""Sized image URLs for the imgix-backed photo CDN."""

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class ImageSizing:
    """Builds image URLs fitted to the display."""

    screen_width: int
    screen_height: int
    quality: int = 80

    def screen_size(self) -> int:
        """Return the larger screen dimension."""
        return max(self.screen_width, self.screen_height)

    def build_options(self, **overrides: object) -> dict[str, object]:
        """Return imgix query parameters, with overrides applied last."""
        size = self.screen_size()
        params: dict[str, object] = {
            "auto": "format",
            # Fit within w/h without cropping.
            "fit": "max",
            "w": size,
            "h": size,
            "q": self.quality,
        }
        params.update(overrides)
        return params

    def full_image_url(self, base_url: str, **overrides: object) -> str:
        """Return the base URL with sizing parameters appended."""
        url = httpx.URL(base_url).copy_merge_params(self.build_options(**overrides))
        return str(url)
