"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from inspirat.app_logging import configure_logging
from inspirat.containers import AppContainer
from inspirat.services.overrides import DevOverrides, SplashView


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(logging.DEBUG if settings.is_development else settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        await state_container.rotation_session.ensure_mounted()
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def require_development(state_container: AppContainer) -> None:
        if not state_container.settings.is_development:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    def splash_payload(
        state_container: AppContainer, view: SplashView | None
    ) -> dict[str, object]:
        if view is None:
            return {"photo": None}
        photo = view.photo
        logger.debug('Current photo ID: "%s"', photo.id)
        return {
            "photo": photo.model_dump(),
            "image_url": state_container.image_sizing.full_image_url(photo.urls.full),
            "index": view.index,
            "total": view.total,
            "swatch": photo.color if view.show_swatch else None,
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/photos")
    async def photos(request: Request) -> dict[str, object]:
        """Return the collection in this client's rotation order."""
        state_container: AppContainer = request.app.state.container
        state = await state_container.rotation_session.ensure_mounted()
        if state is None:
            return {"photos": []}
        return {"photos": [photo.model_dump() for photo in state.collection]}

    @app.get("/splash")
    async def splash(request: Request) -> dict[str, object]:
        """Return the photo to display today."""
        state_container: AppContainer = request.app.state.container
        state = await state_container.rotation_session.ensure_mounted()
        overrides = DevOverrides()
        if state_container.settings.is_development:
            overrides = DevOverrides.from_query(request.query_params)
        return splash_payload(state_container, overrides.apply(state))

    @app.post("/splash/next")
    async def splash_next(request: Request) -> dict[str, object]:
        """Advance to the next photo."""
        return await _navigate(request, 1)

    @app.post("/splash/previous")
    async def splash_previous(request: Request) -> dict[str, object]:
        """Go back to the previous photo."""
        return await _navigate(request, -1)

    async def _navigate(request: Request, delta: int) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        require_development(state_container)
        session = state_container.rotation_session
        if await session.ensure_mounted() is None:
            return {"photo": None}
        state = session.step(delta)
        return splash_payload(state_container, DevOverrides().apply(state))

    return app
