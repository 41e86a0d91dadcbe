"""
Pokemon service - fetches a Pokemon from PokeAPI and reduces it to {id, name, type}.
"""
from __future__ import annotations

import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple

import httpx
from pydantic import BaseModel, StrictInt, StrictStr, ValidationError

from pokefetch.logging import get_logger

logger = get_logger(__name__)


POKEAPI_BASE_URL = "https://pokeapi.co/api/v2"

# Random IDs only cover the first hundred entries
RANDOM_ID_MIN = 1
RANDOM_ID_MAX = 100

DEFAULT_CACHE_LIFETIME_SECONDS = 3600


class PokemonFetchError(Exception):
    """Base class for errors raised while fetching a Pokemon."""


class FetchFailed(PokemonFetchError):
    """PokeAPI answered with a non-success status."""

    def __init__(self, status_text: str, status_code: int, identifier: int):
        super().__init__(f"Failed to fetch Pokemon: {status_text}")
        self.status_text = status_text
        self.status_code = status_code
        self.identifier = identifier


class MalformedResponse(PokemonFetchError):
    """PokeAPI answered with a body that is not the expected Pokemon JSON."""


class OptionSource(str, Enum):
    SUPPLIED = "supplied"
    DEFAULT = "default"


@dataclass(frozen=True)
class FetchOptions:
    """Effective parameters of a single fetch."""
    identifier: int
    cache_lifetime_seconds: int
    identifier_source: OptionSource
    cache_lifetime_source: OptionSource


class Transport(Protocol):
    async def fetch(self, url: str, cache_lifetime_seconds: int) -> httpx.Response:
        ...


class UpstreamNamedResource(BaseModel):
    name: StrictStr


class UpstreamTypeSlot(BaseModel):
    type: UpstreamNamedResource


class UpstreamPokemon(BaseModel):
    """The subset of a PokeAPI /pokemon/{id} body that gets projected."""
    # Strict so id and name are copied verbatim, never coerced
    id: StrictInt
    name: StrictStr
    types: List[UpstreamTypeSlot]


@dataclass(frozen=True)
class PokemonResult:
    """Reduced Pokemon returned to callers."""
    id: int
    name: str
    type: Tuple[str, ...]

    @classmethod
    def from_upstream(cls, pokemon: UpstreamPokemon) -> PokemonResult:
        return cls(
            id=pokemon.id,
            name=pokemon.name,
            type=tuple(slot.type.name for slot in pokemon.types),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": list(self.type),
        }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_fetch_options(
    identifier: Optional[int] = None,
    cache_lifetime_seconds: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> FetchOptions:
    """
    Apply defaults to the optional fetch parameters.

    A missing identifier is drawn uniformly from [RANDOM_ID_MIN, RANDOM_ID_MAX];
    a missing cache lifetime becomes DEFAULT_CACHE_LIFETIME_SECONDS. A supplied
    lifetime of 0 is kept.

    Raises:
        ValueError: If a supplied identifier is not a positive int or a
            supplied lifetime is not a non-negative int
    """
    if identifier is None:
        identifier = (rng or random).randint(RANDOM_ID_MIN, RANDOM_ID_MAX)
        identifier_source = OptionSource.DEFAULT
    elif not _is_int(identifier) or identifier < 1:
        raise ValueError(f"Pokemon identifier must be a positive integer, got {identifier!r}")
    else:
        identifier_source = OptionSource.SUPPLIED

    if cache_lifetime_seconds is None:
        cache_lifetime_seconds = DEFAULT_CACHE_LIFETIME_SECONDS
        cache_lifetime_source = OptionSource.DEFAULT
    elif not _is_int(cache_lifetime_seconds) or cache_lifetime_seconds < 0:
        raise ValueError(
            f"Cache lifetime must be a non-negative integer, got {cache_lifetime_seconds!r}"
        )
    else:
        cache_lifetime_source = OptionSource.SUPPLIED

    return FetchOptions(
        identifier=identifier,
        cache_lifetime_seconds=cache_lifetime_seconds,
        identifier_source=identifier_source,
        cache_lifetime_source=cache_lifetime_source,
    )


def pokemon_url(identifier: int, base_url: str = POKEAPI_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/pokemon/{identifier}"


def parse_pokemon(response: httpx.Response) -> PokemonResult:
    """
    Decode a successful PokeAPI response into a PokemonResult.

    Raises:
        MalformedResponse: If the body is not JSON or lacks id, name or types
    """
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"PokeAPI returned a non-JSON body: {e}")
        raise MalformedResponse(f"PokeAPI returned a non-JSON body: {e}") from e

    try:
        pokemon = UpstreamPokemon.model_validate(data)
    except ValidationError as e:
        logger.warning(f"PokeAPI returned an unexpected Pokemon shape: {e.error_count()} error(s)")
        raise MalformedResponse(f"PokeAPI returned an unexpected Pokemon shape: {e}") from e

    return PokemonResult.from_upstream(pokemon)


async def fetch_pokemon(
    identifier: Optional[int] = None,
    cache_lifetime_seconds: Optional[int] = None,
    *,
    transport: Transport,
    base_url: str = POKEAPI_BASE_URL,
    rng: Optional[random.Random] = None,
) -> PokemonResult:
    """
    Fetch one Pokemon and return its id, name and type names.

    Args:
        identifier: PokeAPI id; random in [1, 100] when omitted
        cache_lifetime_seconds: Revalidation hint for the transport; 3600 when omitted
        transport: Performs the single outbound GET
        base_url: PokeAPI root, without trailing /pokemon
        rng: Random source for the default identifier

    Returns:
        The projected PokemonResult

    Raises:
        ValueError: If a supplied parameter is out of range
        FetchFailed: If PokeAPI answers with a non-2xx status
        MalformedResponse: If the body cannot be decoded into a Pokemon
        httpx.RequestError: If the request itself fails
    """
    options = resolve_fetch_options(identifier, cache_lifetime_seconds, rng=rng)

    revalidate_note = ""
    if options.cache_lifetime_source is OptionSource.SUPPLIED:
        revalidate_note = f" (revalidate: {options.cache_lifetime_seconds}s)"
    logger.info(f"Fetching Pokemon with ID: {options.identifier}{revalidate_note}")

    response = await transport.fetch(
        pokemon_url(options.identifier, base_url),
        cache_lifetime_seconds=options.cache_lifetime_seconds,
    )

    if not response.is_success:
        logger.error(f"Failed to fetch Pokemon {options.identifier}: {response.reason_phrase}")
        raise FetchFailed(response.reason_phrase, response.status_code, options.identifier)

    result = parse_pokemon(response)
    logger.info(f"Successfully fetched Pokemon: {result.name} (ID: {result.id})")
    return result
