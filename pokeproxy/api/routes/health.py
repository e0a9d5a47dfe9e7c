from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import Dict, List, Optional

from pokeproxy import __version__
from pokeproxy.api.dependencies import get_app_settings, get_pokemon_service
from pokeproxy.core.config import Settings
from pokeproxy.core.logging import get_logger
from pokeproxy.services.pokemon_service import PokemonService

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    ok: bool = True


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status with dependency information."""
    version: str = __version__
    service: str = "Pokedex Proxy"
    dependencies: List[DependencyStatus]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus()


@health_router.get(
    "/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Returns health status including cache occupancy and upstream configuration."
)
async def get_detailed_health(
    pokemon_service: PokemonService = Depends(get_pokemon_service),
    settings: Settings = Depends(get_app_settings),
) -> DetailedHealthStatus:
    """
    Detailed health check endpoint with dependency status.

    The upstream is reported as configured, not probed, so a health check
    never spends an upstream call.
    """
    logger.debug("Detailed health check requested")

    cache_stats = pokemon_service.cache_stats()
    dependencies = [
        DependencyStatus(
            name="cache",
            status="ok",
            details={"size": cache_stats["size"], "capacity": cache_stats["capacity"]}
        ),
        DependencyStatus(
            name="pokeapi",
            status="configured",
            details={"base_url": settings.POKEAPI_BASE_URL, "timeout": settings.UPSTREAM_TIMEOUT}
        ),
    ]

    return DetailedHealthStatus(
        service=settings.PROJECT_NAME,
        dependencies=dependencies
    )
