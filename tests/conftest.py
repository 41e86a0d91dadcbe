"""
Shared test fixtures and helpers.
"""
from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator, List

import httpx
import pytest
from loguru import logger

from pokefetch.services.transport import PokeApiTransport
from pokefetch.state import AppState, app_state


TEST_BASE_URL = "https://pokeapi.test/api/v2"


def make_pokeapi_body(
    pokemon_id: int = 25,
    name: str = "pikachu",
    types: List[str] | None = None,
) -> Dict[str, Any]:
    """Create a PokeAPI-style /pokemon/{id} body with a few extra fields."""
    if types is None:
        types = ["electric"]
    return {
        "id": pokemon_id,
        "name": name,
        "height": 4,
        "weight": 60,
        "types": [
            {"slot": slot, "type": {"name": type_name, "url": f"https://pokeapi.co/api/v2/type/{slot}/"}}
            for slot, type_name in enumerate(types, start=1)
        ],
    }


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport:
    """Transport double that records every fetch and replays a canned response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    async def fetch(self, url: str, cache_lifetime_seconds: int) -> httpx.Response:
        self.calls.append({"url": url, "cache_lifetime_seconds": cache_lifetime_seconds})
        return self.response


@pytest.fixture
def pikachu_body() -> Dict[str, Any]:
    """Pikachu as PokeAPI returns it."""
    return make_pokeapi_body()


@pytest.fixture
def bulbasaur_body() -> Dict[str, Any]:
    """A dual-type Pokemon as PokeAPI returns it."""
    return make_pokeapi_body(pokemon_id=1, name="bulbasaur", types=["grass", "poison"])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def http_client() -> httpx.AsyncClient:
    """HTTP client closed after the test."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def transport(http_client, clock) -> PokeApiTransport:
    """Caching transport driven by the fake clock."""
    return PokeApiTransport(http_client, max_entries=10, timer=clock)


@pytest.fixture
def recording_transport(pikachu_body) -> RecordingTransport:
    """Transport double answering 200 with Pikachu."""
    return RecordingTransport(httpx.Response(200, json=pikachu_body))


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Collect loguru messages emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@contextmanager
def installed_app_state() -> Iterator[AppState]:
    """
    Install a fresh client and transport on app_state, then close the client
    and restore the previous values.
    """
    original_client = app_state.http_client
    original_transport = app_state.transport

    client = httpx.AsyncClient()
    app_state.http_client = client
    app_state.transport = PokeApiTransport(client)

    try:
        yield app_state
    finally:
        asyncio.run(client.aclose())
        app_state.http_client = original_client
        app_state.transport = original_transport


@pytest.fixture
def mock_app_state() -> Generator[AppState, None, None]:
    """Set app_state up with a real transport and reset it after the test."""
    with installed_app_state() as state:
        yield state


@pytest.fixture
def mock_env(monkeypatch):
    """Point the service at the test PokeAPI host."""
    monkeypatch.setenv("POKEFETCH_BASE_URL", TEST_BASE_URL)
    from pokefetch.config import get_config
    get_config.cache_clear()
    yield
    get_config.cache_clear()
