"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from inspirat.adapters.image_loader import HttpxImageLoader
from inspirat.adapters.json_file_store import JsonFileKeyValueStore
from inspirat.adapters.photo_source_client import HttpxPhotoSourceClient
from inspirat.adapters.supabase_kv_store import SupabaseKeyValueStore
from inspirat.config import Settings
from inspirat.services.collection import CollectionCacheManager, KeyValueStore
from inspirat.services.images import ImageSizing
from inspirat.services.preload import NeighborPreloader
from inspirat.services.session import RotationSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    image_sizing: ImageSizing
    collection_manager: CollectionCacheManager
    preloader: NeighborPreloader
    rotation_session: RotationSession
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(Path(settings.storage_path))
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    photo_source = HttpxPhotoSourceClient.create(resolved_settings.collection_url)
    image_loader = HttpxImageLoader.create(
        max_entries=resolved_settings.preload_cache_size
    )
    image_sizing = ImageSizing(
        screen_width=resolved_settings.screen_width,
        screen_height=resolved_settings.screen_height,
        quality=resolved_settings.image_quality,
    )
    collection_manager = CollectionCacheManager(
        source=photo_source,
        store=store,
        ttl=resolved_settings.cache_ttl,
    )
    preloader = NeighborPreloader(
        loader=image_loader,
        url_builder=image_sizing.full_image_url,
    )
    rotation_session = RotationSession(
        collection_manager=collection_manager,
        preloader=preloader,
        client_name=resolved_settings.client_name,
    )

    async def close_resources() -> None:
        await rotation_session.wait_for_background()
        await photo_source.close()
        await image_loader.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        image_sizing=image_sizing,
        collection_manager=collection_manager,
        preloader=preloader,
        rotation_session=rotation_session,
        close_resources=close_resources,
    )
