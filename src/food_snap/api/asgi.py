"""ASGI entrypoint for the Food Snap API."""

from food_snap.api.app import create_app
from food_snap.containers import build_container

app = create_app(build_container())
