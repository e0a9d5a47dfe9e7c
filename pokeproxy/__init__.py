"""
Pokedex Proxy - caching proxy in front of PokeAPI.

This package fetches Pokemon data from PokeAPI, caches raw responses in a
bounded in-memory LRU/TTL cache, normalizes them into a stable schema and
enriches them with best-effort species information.
"""

__version__ = "0.1.0"
