"""Infrastructure layer for the Pokedex Proxy."""

from pokeproxy.infrastructure.cache import MemoryCache
from pokeproxy.infrastructure.error import ErrorHandler
