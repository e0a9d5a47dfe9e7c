"""
Domain models package for the Pokedex Proxy.

These models are the stable, application-facing schema. They are
persistence-agnostic and independent of the upstream document shapes.
"""

from pokeproxy.domain.models.pokemon import (
    Ability,
    EnrichmentFailure,
    EnrichmentResult,
    FlavorText,
    LookupResult,
    Pokemon,
    SpeciesInfo,
    Sprites,
    Stat,
)

__all__ = [
    "Ability",
    "EnrichmentFailure",
    "EnrichmentResult",
    "FlavorText",
    "LookupResult",
    "Pokemon",
    "SpeciesInfo",
    "Sprites",
    "Stat",
]
