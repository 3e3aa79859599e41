"""Command-line entrypoint that prints today's photo."""

import asyncio

from inspirat.app_logging import configure_logging
from inspirat.containers import AppContainer, build_container


def main(container: AppContainer | None = None) -> None:
    """Print the photo selected for today."""
    container = container or build_container()
    configure_logging(container.settings.log_level)
    asyncio.run(_show_today(container))


async def _show_today(container: AppContainer) -> None:
    session = container.rotation_session
    try:
        state = await session.mount()
        photo = session.current_photo()
        if state is None or photo is None:
            print("Inspirat: no photo available")
            return
        url = container.image_sizing.full_image_url(photo.urls.full)
        print(
            f"Inspirat: photo {photo.id} "
            f"({state.index + 1}/{len(state.collection)}) {url}"
        )
    finally:
        await container.close_resources()


if __name__ == "__main__":
    main()
