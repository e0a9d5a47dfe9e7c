from typing import Any, Dict, Mapping, Optional, Tuple

from pokeproxy.adapters.interfaces import APIConnector, CacheStrategy
from pokeproxy.adapters.pokeapi.normalizer import PokemonNormalizer
from pokeproxy.core.exceptions import (
    APIException,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from pokeproxy.core.logging import get_logger
from pokeproxy.domain.models import (
    EnrichmentFailure,
    EnrichmentResult,
    LookupResult,
)
from pokeproxy.infrastructure.error import ErrorHandler, ErrorSeverity

logger = get_logger(__name__)

POKEMON_KEY_PREFIX = "pokemon:"
SPECIES_KEY_PREFIX = "species:"


def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def species_cache_key(raw_pokemon: Mapping[str, Any]) -> Optional[str]:
    """
    Cache key for the species record, taken from the raw Pokemon document.

    Prefers the species name and falls back to its URL.
    """
    species = raw_pokemon.get("species")
    if not isinstance(species, Mapping):
        return None

    identifier = species.get("name") or species.get("url")
    return f"{SPECIES_KEY_PREFIX}{identifier}" if identifier else None


class PokemonService:
    """
    Answers Pokemon lookups through the shared cache.

    The primary lookup goes cache -> upstream -> normalize and any failure
    ends the request with an error envelope. The species lookup that follows
    is best effort: its failures become an inline error marker and never
    fail the request. Nothing is retried.
    """

    def __init__(
        self,
        cache: CacheStrategy[str, Any],
        client: APIConnector,
        normalizer: Optional[PokemonNormalizer] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        """Initialize with the cache, upstream client and normalizer."""
        self.cache = cache
        self.client = client
        self.normalizer = normalizer or PokemonNormalizer()
        self.error_handler = error_handler or ErrorHandler(logger)

    async def lookup(self, name: Optional[str]) -> LookupResult:
        """Looks a Pokemon up by name and returns the response envelope."""
        pokemon_name = normalize_name(name)

        try:
            if not pokemon_name:
                raise ValidationError("name required", field="name")

            cache_key = f"{POKEMON_KEY_PREFIX}{pokemon_name}"
            raw, cached = await self._fetch_and_cache(
                self.client.primary_url(pokemon_name), cache_key
            )
            pokemon = self.normalizer.normalize_primary(raw)

        except UpstreamError as e:
            if e.status_code == 404:
                return self._failure(
                    NotFoundError("Pokemon", pokemon_name, detail="Pokemon not found"),
                    pokemon_name,
                )
            return self._failure(e, pokemon_name)
        except APIException as e:
            return self._failure(e, pokemon_name)

        if pokemon.species_url:
            species = await self._lookup_species(pokemon.species_url, raw)
            pokemon = pokemon.with_species(species)

        logger.info(
            f"Resolved pokemon '{pokemon_name}'",
            extra={"pokemon": pokemon_name, "cached": cached}
        )
        return LookupResult.success(pokemon, cached=cached)

    async def _fetch_and_cache(self, url: str, cache_key: str) -> Tuple[Mapping[str, Any], bool]:
        """
        Return the raw document for ``cache_key``, fetching and storing it on a miss.

        The second element tells whether the document came from the cache. It
        is decided by a single cache read made before any upstream call.
        """
        data = self.cache.get(cache_key)
        if data is not None:
            return data, True

        data = await self.client.retrieve(url)
        self.cache.set(cache_key, data)
        return data, False

    async def _lookup_species(self, species_url: str, raw_pokemon: Mapping[str, Any]) -> EnrichmentResult:
        """Fetch and normalize the species record; always yields a value."""
        cache_key = species_cache_key(raw_pokemon) or f"{SPECIES_KEY_PREFIX}{species_url}"

        try:
            raw_species, _ = await self._fetch_and_cache(species_url, cache_key)
            return self.normalizer.normalize_enrichment(raw_species)
        except APIException as e:
            self.error_handler.handle_error(
                e,
                source="species_lookup",
                context={"species_url": species_url},
                severity=ErrorSeverity.MEDIUM,
            )
            return EnrichmentFailure()

    def _failure(self, error: APIException, pokemon_name: str) -> LookupResult:
        self.error_handler.handle_error(
            error,
            source="pokemon_lookup",
            context={"pokemon": pokemon_name},
        )
        return LookupResult.failure(error.detail, status_code=error.status_code)

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()

    def cache_clear(self) -> int:
        cleared = self.cache.clear()
        logger.info(f"Cache cleared on request ({cleared} entries)")
        return cleared
