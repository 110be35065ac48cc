"""ASGI entry point: ``litestar --app main:app run`` from the ``src`` directory."""

from api.app import create_app

app = create_app()
