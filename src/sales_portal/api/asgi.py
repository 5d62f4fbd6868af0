"""ASGI entrypoint for the sales portal API."""

from sales_portal.api.app import create_app
from sales_portal.containers import build_container

app = create_app(build_container())
