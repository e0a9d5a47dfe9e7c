"""
Services package for the Pokedex Proxy.

Services orchestrate the application workflows, coordinating the cache, the
upstream client and the normalizer. The cache is taken through the
``CacheStrategy`` abstraction in ``pokeproxy.adapters.interfaces``.
"""

from pokeproxy.services.pokemon_service import PokemonService

__all__ = ["PokemonService"]
