"""Caching implementations for the Pokedex Proxy."""

from pokeproxy.infrastructure.cache.memory_cache import MemoryCache, CacheStats, freeze

__all__ = ["MemoryCache", "CacheStats", "freeze"]
