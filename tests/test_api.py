"""
HTTP tests for the FastAPI application.

The application is built with a service wired to the fake upstream, so
routes, envelopes and middleware are exercised end to end.
"""

import pytest
from fastapi.testclient import TestClient

from pokeproxy.core.config import Settings
from pokeproxy.main import create_application
from tests.conftest import PIKACHU_PATH, PIKACHU_SPECIES_PATH


@pytest.fixture
def settings():
    return Settings(PROJECT_NAME="Pokedex Proxy Test", CACHE_MAX_ENTRIES=10, CACHE_TTL=60)


@pytest.fixture
def client(settings, pokemon_service):
    app = create_application(settings=settings, pokemon_service=pokemon_service)
    with TestClient(app) as test_client:
        yield test_client


class TestPokemonRoute:
    def test_lookup_then_cached(self, client, upstream):
        first = client.get("/api/pokemon/pikachu")
        second = client.get("/api/pokemon/PIKACHU")

        assert first.status_code == 200
        assert first.json()["ok"] is True
        assert first.json()["cached"] is False
        assert second.json()["cached"] is True
        assert second.json()["data"] == first.json()["data"]
        assert upstream.count(PIKACHU_PATH) == 1

    def test_payload(self, client):
        data = client.get("/api/pokemon/pikachu").json()["data"]

        assert data["id"] == 25
        assert data["types"] == ["electric"]
        assert {"name": "lightning-rod", "is_hidden": True} in data["abilities"]
        assert len(data["moves"]) == 8
        assert data["species"]["color"] == "yellow"

    def test_unknown_pokemon(self, client):
        response = client.get("/api/pokemon/missingno")

        assert response.status_code == 404
        assert response.json() == {"ok": False, "cached": False, "error": "Pokemon not found"}

    def test_blank_name(self, client, upstream):
        response = client.get("/api/pokemon/%20%20")

        assert response.status_code == 400
        assert response.json()["error"] == "name required"
        assert upstream.calls == []

    def test_species_failure_still_succeeds(self, client, upstream):
        upstream.add(PIKACHU_SPECIES_PATH, status_code=500, text="boom")

        response = client.get("/api/pokemon/pikachu")

        assert response.status_code == 200
        assert response.json()["data"]["species"] == {"error": "species fetch failed"}

    def test_upstream_status_is_passed_through(self, client, upstream):
        upstream.add(PIKACHU_PATH, status_code=503, text="maintenance")

        response = client.get("/api/pokemon/pikachu")

        assert response.status_code == 503
        assert response.json()["error"] == "Upstream returned 503: maintenance"


class TestCacheRoutes:
    def test_stats(self, client):
        client.get("/api/pokemon/pikachu")

        stats = client.get("/api/cache/stats").json()

        assert stats["size"] == 2
        assert stats["capacity"] == 10
        assert stats["max"] == 10
        assert stats["misses"] == 2

    def test_clear(self, client, upstream):
        client.get("/api/pokemon/pikachu")

        response = client.post("/api/cache/clear")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "cleared": True, "removed": 2}
        assert client.get("/api/cache/stats").json()["size"] == 0
        assert client.get("/api/pokemon/pikachu").json()["cached"] is False
        assert upstream.count(PIKACHU_PATH) == 2


class TestHealthRoutes:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_detailed_health_reports_dependencies(self, client, settings):
        body = client.get("/api/health/detailed").json()

        assert body["service"] == "Pokedex Proxy Test"
        names = {dep["name"]: dep for dep in body["dependencies"]}
        assert names["cache"]["details"]["capacity"] == 10
        assert names["pokeapi"]["status"] == "configured"


class TestMiddleware:
    def test_generates_correlation_id(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Correlation-ID"]

    def test_echoes_correlation_id(self, client):
        response = client.get("/api/health", headers={"X-Correlation-ID": "req-123"})
        assert response.headers["X-Correlation-ID"] == "req-123"
