"""ASGI entrypoint for the FitTrack API."""

from fittrack.api.app import create_app
from fittrack.containers import build_container

app = create_app(build_container())
