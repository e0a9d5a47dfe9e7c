from fastapi import Request

from pokeproxy.core.config import Settings, get_settings
from pokeproxy.core.logging import get_logger
from pokeproxy.adapters.pokeapi import PokeAPIClient, PokemonNormalizer
from pokeproxy.infrastructure.cache import MemoryCache
from pokeproxy.services.pokemon_service import PokemonService

# Initialize logger
logger = get_logger(__name__)


def build_pokemon_service(settings: Settings) -> PokemonService:
    """
    Build the service graph for one application instance.

    The cache is created here and handed to the service, so every
    application (and every test) gets its own isolated cache.

    Args:
        settings: Application settings

    Returns:
        PokemonService: Service wired with cache, client and normalizer
    """
    cache = MemoryCache(
        max_entries=settings.CACHE_MAX_ENTRIES,
        ttl=settings.CACHE_TTL,
    )
    client = PokeAPIClient(
        base_url=settings.POKEAPI_BASE_URL,
        timeout=settings.UPSTREAM_TIMEOUT,
    )
    logger.debug("Built pokemon service")
    return PokemonService(cache=cache, client=client, normalizer=PokemonNormalizer())


async def get_pokemon_service(request: Request) -> PokemonService:
    """
    Dependency providing the application's PokemonService.

    Args:
        request: Incoming request, used to reach the application state

    Returns:
        PokemonService: The service attached at application creation
    """
    return request.app.state.pokemon_service


async def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()
