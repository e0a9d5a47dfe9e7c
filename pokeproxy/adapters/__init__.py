"""
Adapters package for the Pokedex Proxy.

This package contains components for integrating with the upstream API:
- Abstract interfaces that define the contracts for adapters
- The concrete PokeAPI client and normalizer
"""

# Import the interfaces subpackage to make it available
from . import interfaces

from .pokeapi import PokeAPIClient, PokemonNormalizer

__all__ = [
    'interfaces',
    'PokeAPIClient',
    'PokemonNormalizer',
]
