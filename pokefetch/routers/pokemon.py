"""
Pokemon router - exposes fetch_pokemon over HTTP.
"""
from __future__ import annotations

from typing import List, Optional

import httpx
from fastapi import APIRouter, HTTPException, Path, Query
from pydantic import BaseModel, Field

from pokefetch.config import get_config
from pokefetch.logging import get_logger
from pokefetch.services.pokemon import (
    FetchFailed,
    MalformedResponse,
    PokemonResult,
    fetch_pokemon,
)
from pokefetch.state import app_state

logger = get_logger(__name__)

router = APIRouter(tags=["pokemon"])


class PokemonResponse(BaseModel):
    """Reduced Pokemon data."""
    id: int = Field(examples=[25], description="PokeAPI id")
    name: str = Field(examples=["pikachu"], description="PokeAPI name")
    type: List[str] = Field(examples=[["electric"]], description="Type names in slot order")

    @classmethod
    def from_result(cls, result: PokemonResult) -> PokemonResponse:
        return cls(**result.to_dict())


ERROR_RESPONSES = {
    404: {"description": "PokeAPI has no Pokemon with this id"},
    500: {"description": "Internal server error (transport not initialized)"},
    502: {"description": "PokeAPI failed, was unreachable, or returned a malformed body"},
    504: {"description": "PokeAPI timeout"},
}

REVALIDATE_QUERY = Query(
    default=None,
    ge=0,
    description="Seconds a cached PokeAPI response may be reused (default 3600, 0 disables)",
)


def _map_fetch_error(error: Exception, identifier: Optional[int]) -> HTTPException:
    """Map fetch errors to appropriate HTTP exceptions."""
    if isinstance(error, FetchFailed):
        status_code = 404 if error.status_code == 404 else 502
        return HTTPException(status_code=status_code, detail=str(error))

    if isinstance(error, MalformedResponse):
        return HTTPException(status_code=502, detail="Malformed response from PokeAPI")

    if isinstance(error, httpx.TimeoutException):
        logger.error(f"Timeout fetching Pokemon {identifier}")
        return HTTPException(status_code=504, detail="PokeAPI timeout")

    if isinstance(error, httpx.RequestError):
        logger.error(f"Connection error fetching Pokemon {identifier}: {error}")
        return HTTPException(status_code=502, detail="Failed to connect to PokeAPI")

    logger.error(f"Unexpected error fetching Pokemon {identifier}: {error}")
    return HTTPException(status_code=502, detail="Failed to fetch Pokemon")


async def _fetch(identifier: Optional[int], revalidate: Optional[int]) -> PokemonResponse:
    if app_state.transport is None:
        logger.error("PokeAPI transport not initialized")
        raise HTTPException(status_code=500, detail="Internal server error")

    try:
        result = await fetch_pokemon(
            identifier,
            revalidate,
            transport=app_state.transport,
            base_url=get_config().pokefetch_base_url,
        )
    except Exception as e:
        raise _map_fetch_error(e, identifier)

    return PokemonResponse.from_result(result)


@router.get("/pokemon", response_model=PokemonResponse, responses=ERROR_RESPONSES)
async def random_pokemon(revalidate: Optional[int] = REVALIDATE_QUERY) -> PokemonResponse:
    """
    Fetch a random Pokemon among the first hundred.

    **Query:**
    - `revalidate` (optional): cache lifetime in seconds for the PokeAPI response
    """
    return await _fetch(None, revalidate)


@router.get("/pokemon/{pokemon_id}", response_model=PokemonResponse, responses=ERROR_RESPONSES)
async def pokemon_by_id(
    pokemon_id: int = Path(ge=1, description="PokeAPI id"),
    revalidate: Optional[int] = REVALIDATE_QUERY,
) -> PokemonResponse:
    """
    Fetch a Pokemon by PokeAPI id.

    **Flow:**
    1. Fetch `/pokemon/{pokemon_id}` from PokeAPI (or reuse a cached response)
    2. Reduce it to `id`, `name` and the list of type names
    """
    return await _fetch(pokemon_id, revalidate)
