"""
Application state - shared state initialized at startup.
"""
from __future__ import annotations

import httpx

from pokefetch.services.transport import PokeApiTransport


class AppState:
    """
    Application state container.
    Initialized at startup via lifespan, read by the routers.
    """

    def __init__(self):
        self.http_client: httpx.AsyncClient | None = None
        self.transport: PokeApiTransport | None = None


app_state = AppState()
