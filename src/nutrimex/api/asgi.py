"""ASGI entrypoint for the NutriMex page API."""

from nutrimex.api.app import create_app
from nutrimex.containers import build_container

app = create_app(build_container())
