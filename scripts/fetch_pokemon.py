#!/usr/bin/env python3
"""
Fetch a Pokemon through a running PokeFetch service.

Usage:
    python scripts/fetch_pokemon.py                    # Random Pokemon (id 1-100)
    python scripts/fetch_pokemon.py --id 25            # Pikachu
    python scripts/fetch_pokemon.py --id 1 --revalidate 0
    python scripts/fetch_pokemon.py --url http://localhost:8000
"""
from __future__ import annotations

import argparse
import sys

import httpx


def build_path(pokemon_id: int | None) -> str:
    if pokemon_id is None:
        return "/pokemon"
    return f"/pokemon/{pokemon_id}"


def request_pokemon(service_url: str, pokemon_id: int | None, revalidate: int | None) -> int:
    """Call the service and print the result. Returns a process exit code."""
    params = {} if revalidate is None else {"revalidate": revalidate}
    label = "random Pokemon" if pokemon_id is None else f"Pokemon #{pokemon_id}"
    print(f"\n📤 Requesting {label}" + (f" (revalidate: {revalidate}s)" if params else ""))

    try:
        response = httpx.get(
            f"{service_url.rstrip('/')}{build_path(pokemon_id)}",
            params=params,
            timeout=10.0
        )
    except httpx.RequestError as e:
        print(f"\n❌ Error: {e}")
        print("   Is the service running? (fastapi dev pokefetch/main.py)")
        return 1

    print(f"\n📥 Response ({response.status_code}):")
    try:
        data = response.json()
    except ValueError:
        print(f"   {response.text}")
        return 1

    if response.is_success:
        print(f"   #{data['id']} {data['name']}")
        print(f"   Type: {'/'.join(data['type'])}")
        return 0

    print(f"   Error: {data.get('detail', response.text)}")
    return 1


def main():
    parser = argparse.ArgumentParser(description="Fetch a Pokemon from PokeFetch")
    parser.add_argument("--id", type=int, dest="pokemon_id", help="PokeAPI id (random 1-100 if omitted)")
    parser.add_argument("--revalidate", type=int, help="Cache lifetime in seconds")
    parser.add_argument("--url", default="http://localhost:8000", help="PokeFetch service URL")

    args = parser.parse_args()

    if args.pokemon_id is not None and args.pokemon_id < 1:
        parser.error("--id must be a positive integer")
    if args.revalidate is not None and args.revalidate < 0:
        parser.error("--revalidate must be non-negative")

    sys.exit(request_pokemon(args.url, args.pokemon_id, args.revalidate))


if __name__ == "__main__":
    main()
