from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pokeproxy.api.dependencies import get_pokemon_service
from pokeproxy.core.logging import get_logger
from pokeproxy.services.pokemon_service import PokemonService

# Initialize router and logger
pokemon_router = APIRouter()
logger = get_logger(__name__)


class AbilityModel(BaseModel):
    name: str
    is_hidden: bool


class StatModel(BaseModel):
    name: str
    base: int


class SpritesModel(BaseModel):
    front_default: Optional[str] = None
    official_artwork: Optional[str] = None


class PokemonModel(BaseModel):
    """Normalized Pokemon as rendered to clients."""
    id: int
    name: str
    height: Optional[int] = None
    weight: Optional[int] = None
    types: List[str]
    abilities: List[AbilityModel]
    sprites: SpritesModel
    stats: List[StatModel]
    moves: List[str]
    species_url: Optional[str] = None
    species: Optional[Dict[str, Any]] = None


class LookupEnvelope(BaseModel):
    """Envelope returned by every lookup."""
    ok: bool
    cached: bool = False
    data: Optional[PokemonModel] = None
    error: Optional[str] = None


@pokemon_router.get(
    "/{name}",
    response_model=LookupEnvelope,
    summary="Look up a Pokemon",
    description="Returns the normalized Pokemon, served from cache when possible.",
    responses={
        400: {"model": LookupEnvelope, "description": "Empty name"},
        404: {"model": LookupEnvelope, "description": "Unknown Pokemon"},
        502: {"model": LookupEnvelope, "description": "Upstream unreachable"},
    },
)
async def get_pokemon(
    name: str = Path(..., description="Pokemon name, case-insensitive"),
    pokemon_service: PokemonService = Depends(get_pokemon_service),
) -> JSONResponse:
    """Looks a Pokemon up by name."""
    result = await pokemon_service.lookup(name)
    return JSONResponse(status_code=result.status_code, content=result.to_dict())
