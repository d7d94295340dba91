"""ASGI entrypoint for the coach nutrition API."""

from coach_nutrition.api.app import create_app
from coach_nutrition.containers import build_container

app = create_app(build_container())
