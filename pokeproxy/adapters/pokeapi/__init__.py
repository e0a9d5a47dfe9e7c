"""PokeAPI integration: HTTP client and document normalizer."""

from pokeproxy.adapters.pokeapi.client import PokeAPIClient
from pokeproxy.adapters.pokeapi.normalizer import PokemonNormalizer

__all__ = ["PokeAPIClient", "PokemonNormalizer"]
