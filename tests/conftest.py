"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import copy
from typing import Any

import httpx
import pytest

from pokeproxy.adapters.pokeapi import PokeAPIClient, PokemonNormalizer
from pokeproxy.infrastructure.cache import MemoryCache
from pokeproxy.services.pokemon_service import PokemonService

BASE_URL = "https://pokeapi.test/api/v2"
PIKACHU_PATH = "/api/v2/pokemon/pikachu"
PIKACHU_SPECIES_PATH = "/api/v2/pokemon-species/25/"


# ============================================================
# Test doubles
# ============================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UpstreamStub:
    """
    Fake PokeAPI for httpx.MockTransport.

    Routes requests by URL path to canned responses (or exceptions) and
    records every path requested. Unknown paths answer 404 like PokeAPI.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.calls: list[str] = []

    def add(
        self,
        path: str,
        json: Any = None,
        status_code: int = 200,
        text: str | None = None,
    ) -> None:
        self.routes[path] = (status_code, json, text)

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def count(self, path: str) -> int:
        return self.calls.count(path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        route = self.routes.get(request.url.path)

        if route is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(route, Exception):
            raise route

        status_code, json_body, text = route
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=copy.deepcopy(json_body))


# ============================================================
# Raw PokeAPI payloads
# ============================================================


@pytest.fixture
def pikachu_raw() -> dict[str, Any]:
    """Trimmed /pokemon/pikachu document."""
    return {
        "id": 25,
        "name": "pikachu",
        "height": 4,
        "weight": 60,
        "base_experience": 112,
        "types": [
            {"slot": 1, "type": {"name": "electric", "url": f"{BASE_URL}/type/13/"}},
        ],
        "abilities": [
            {"ability": {"name": "static", "url": f"{BASE_URL}/ability/9/"}, "is_hidden": False, "slot": 1},
            {"ability": {"name": "lightning-rod", "url": f"{BASE_URL}/ability/31/"}, "is_hidden": True, "slot": 3},
        ],
        "sprites": {
            "front_default": "https://img.test/sprites/25.png",
            "back_default": "https://img.test/sprites/back/25.png",
            "other": {
                "official-artwork": {"front_default": "https://img.test/artwork/25.png"},
            },
        },
        "stats": [
            {"base_stat": 35, "effort": 0, "stat": {"name": "hp"}},
            {"base_stat": 55, "effort": 0, "stat": {"name": "attack"}},
            {"base_stat": 40, "effort": 0, "stat": {"name": "defense"}},
            {"base_stat": 90, "effort": 2, "stat": {"name": "speed"}},
        ],
        "moves": [
            {"move": {"name": name}}
            for name in [
                "mega-punch", "pay-day", "thunder-punch", "slam",
                "double-kick", "mega-kick", "headbutt", "body-slam",
                "take-down", "double-edge",
            ]
        ],
        "species": {"name": "pikachu", "url": f"{BASE_URL}/pokemon-species/25/"},
    }


@pytest.fixture
def pikachu_species_raw() -> dict[str, Any]:
    """Trimmed /pokemon-species/25 document."""
    return {
        "id": 25,
        "name": "pikachu",
        "color": {"name": "yellow"},
        "habitat": {"name": "forest"},
        "flavor_text_entries": [
            {"flavor_text": "When several of\nthese POKéMON\fgather, their", "language": {"name": "en"}},
            {"flavor_text": "Il stocke\nl'électricité.", "language": {"name": "fr"}},
            {"flavor_text": "It keeps its tail\nraised.", "language": {"name": "en"}},
            {"flavor_text": "never shown", "language": {"name": "de"}},
        ],
    }


# ============================================================
# Wiring
# ============================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream(pikachu_raw, pikachu_species_raw) -> UpstreamStub:
    """Fake upstream serving pikachu and its species."""
    stub = UpstreamStub()
    stub.add(PIKACHU_PATH, json=pikachu_raw)
    stub.add(PIKACHU_SPECIES_PATH, json=pikachu_species_raw)
    return stub


@pytest.fixture
def pokeapi_client(upstream) -> PokeAPIClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return PokeAPIClient(base_url=BASE_URL, timeout=5.0, http_client=http_client)


@pytest.fixture
def cache(clock) -> MemoryCache:
    return MemoryCache(max_entries=10, ttl=60, clock=clock)


@pytest.fixture
def pokemon_service(cache, pokeapi_client) -> PokemonService:
    return PokemonService(cache=cache, client=pokeapi_client, normalizer=PokemonNormalizer())
