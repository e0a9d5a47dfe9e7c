from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from pokeproxy.api.dependencies import get_pokemon_service
from pokeproxy.core.logging import get_logger
from pokeproxy.services.pokemon_service import PokemonService

# Initialize router and logger
cache_router = APIRouter()
logger = get_logger(__name__)


class CacheStatsResponse(BaseModel):
    """Current cache occupancy and counters."""
    size: int
    capacity: int
    max: int
    ttl_seconds: Optional[float] = None
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    hit_rate: float = 0.0


class CacheClearResponse(BaseModel):
    ok: bool = True
    cleared: bool = True
    removed: int = 0


@cache_router.get(
    "/stats",
    response_model=CacheStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Cache statistics",
)
async def get_cache_stats(
    pokemon_service: PokemonService = Depends(get_pokemon_service),
) -> CacheStatsResponse:
    return CacheStatsResponse(**pokemon_service.cache_stats())


@cache_router.post(
    "/clear",
    response_model=CacheClearResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the cache",
)
async def clear_cache(
    pokemon_service: PokemonService = Depends(get_pokemon_service),
) -> CacheClearResponse:
    removed = pokemon_service.cache_clear()
    return CacheClearResponse(removed=removed)
