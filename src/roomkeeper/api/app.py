"""ASGI entry point (``roomkeeper.api.app:app``)."""

from roomkeeper.api.factory import create_app

app = create_app()
