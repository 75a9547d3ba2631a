"""ASGI entrypoint for the health tracker API."""

from health_tracker.api.app import create_app
from health_tracker.containers import build_container

app = create_app(build_container())
