#!/usr/bin/env python3
"""
Mock PokeAPI server for running PokeFetch offline.

Serves a handful of Pokemon in the PokeAPI /pokemon/{id} shape:
- /api/v2/pokemon/{id} - known ids return JSON, others 404
- /api/v2/pokemon/500  - always 500, to exercise upstream failures
- /api/v2/pokemon/501  - 200 with a non-JSON body

Run with: python scripts/mock_pokeapi.py
Point the service at it: POKEFETCH_BASE_URL=http://localhost:9001/api/v2
"""
from __future__ import annotations

from datetime import datetime

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
import uvicorn

app = FastAPI(title="Mock PokeAPI", description="Offline stand-in for pokeapi.co")

POKEMON = {
    1: ("bulbasaur", ["grass", "poison"]),
    4: ("charmander", ["fire"]),
    7: ("squirtle", ["water"]),
    25: ("pikachu", ["electric"]),
    92: ("gastly", ["ghost", "poison"]),
}


def log_request(pokemon_id: int, status: int):
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] GET /api/v2/pokemon/{pokemon_id} -> {status}")


def pokeapi_body(pokemon_id: int, name: str, types: list[str]) -> dict:
    """Build a trimmed PokeAPI-style Pokemon body."""
    return {
        "id": pokemon_id,
        "name": name,
        "base_experience": 64,
        "types": [
            {
                "slot": slot,
                "type": {"name": type_name, "url": f"https://pokeapi.co/api/v2/type/{type_name}/"}
            }
            for slot, type_name in enumerate(types, start=1)
        ],
    }


@app.get("/api/v2/pokemon/{pokemon_id}")
async def pokemon(pokemon_id: int):
    """PokeAPI Pokemon endpoint."""
    if pokemon_id == 500:
        log_request(pokemon_id, 500)
        return PlainTextResponse("Internal Server Error", status_code=500)

    if pokemon_id == 501:
        log_request(pokemon_id, 200)
        return PlainTextResponse("<html>not json</html>")

    if pokemon_id not in POKEMON:
        log_request(pokemon_id, 404)
        return PlainTextResponse("Not Found", status_code=404)

    name, types = POKEMON[pokemon_id]
    log_request(pokemon_id, 200)
    return JSONResponse(pokeapi_body(pokemon_id, name, types))


@app.get("/health")
async def health():
    """Health check."""
    return {"status": "healthy", "server": "mock-pokeapi"}


if __name__ == "__main__":
    print("\n🎮 Mock PokeAPI Server")
    print("=" * 50)
    print("Listening on http://localhost:9001")
    print(f"Known ids: {', '.join(str(i) for i in sorted(POKEMON))}")
    print("  500 -> upstream error, 501 -> non-JSON body")
    print("=" * 50 + "\n")

    uvicorn.run(app, host="127.0.0.1", port=9001, log_level="warning")
