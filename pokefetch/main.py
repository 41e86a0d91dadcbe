"""
PokeFetch - Pokemon lookup service backed by PokeAPI

Entry point for the FastAPI application.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from dotenv import load_dotenv

from pokefetch.logging import get_logger
from pokefetch.state import app_state
from pokefetch.routers import internal, pokemon
from pokefetch.services.transport import PokeApiTransport
from pokefetch.config import get_config

load_dotenv()

logger = get_logger(__name__)


def _init_http_client() -> None:
    """Initialize shared HTTP client for PokeAPI requests."""
    app_state.http_client = httpx.AsyncClient(timeout=get_config().pokefetch_http_timeout)
    logger.info("HTTP client initialized")


def _init_transport() -> None:
    """Wrap the HTTP client in the caching PokeAPI transport."""
    max_entries = get_config().pokefetch_cache_max_entries
    app_state.transport = PokeApiTransport(app_state.http_client, max_entries=max_entries)
    logger.info(f"PokeAPI transport initialized (cache size {max_entries})")


async def _shutdown_http_client() -> None:
    """Close the shared HTTP client."""
    app_state.transport = None
    if app_state.http_client:
        await app_state.http_client.aclose()
        app_state.http_client = None
        logger.info("HTTP client closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    _init_http_client()
    _init_transport()

    yield

    await _shutdown_http_client()

app = FastAPI(
    title="PokeFetch",
    description="Pokemon lookup service backed by PokeAPI",
    lifespan=lifespan
)

app.include_router(pokemon.router)
app.include_router(internal.router)
