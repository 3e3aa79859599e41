"""ASGI entrypoint for the inspirat API."""

from inspirat.api.app import create_app
from inspirat.containers import build_container

app = create_app(build_container())
