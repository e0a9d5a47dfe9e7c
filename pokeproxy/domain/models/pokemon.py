from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class Ability:
    name: str
    is_hidden: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "is_hidden": self.is_hidden}


@dataclass(frozen=True)
class Stat:
    name: str
    base: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "base": self.base}


@dataclass(frozen=True)
class Sprites:
    front_default: Optional[str] = None
    official_artwork: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "front_default": self.front_default,
            "official_artwork": self.official_artwork,
        }


@dataclass(frozen=True)
class FlavorText:
    flavor: str
    language: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"flavor": self.flavor, "language": self.language}


@dataclass(frozen=True)
class SpeciesInfo:
    """Supplementary species data attached to a Pokemon."""

    color: Optional[str] = None
    habitat: Optional[str] = None
    flavor_text_entries: Tuple[FlavorText, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": self.color,
            "habitat": self.habitat,
            "flavor_text_entries": [entry.to_dict() for entry in self.flavor_text_entries],
        }


@dataclass(frozen=True)
class EnrichmentFailure:
    """Marker rendered in place of species data when the species lookup fails."""

    error: str = "species fetch failed"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}


EnrichmentResult = Union[SpeciesInfo, EnrichmentFailure]


@dataclass(frozen=True)
class Pokemon:
    """
    Domain model for a normalized Pokemon.

    Built once per successful primary lookup and never mutated;
    ``with_species`` returns a new instance.
    """

    id: int
    name: str
    height: Optional[int]
    weight: Optional[int]
    types: Tuple[str, ...]
    abilities: Tuple[Ability, ...]
    sprites: Sprites
    stats: Tuple[Stat, ...]
    moves: Tuple[str, ...] = ()
    species_url: Optional[str] = None
    species: Optional[EnrichmentResult] = None

    def with_species(self, species: EnrichmentResult) -> "Pokemon":
        return replace(self, species=species)

    def hidden_abilities(self) -> Tuple[Ability, ...]:
        return tuple(a for a in self.abilities if a.is_hidden)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "height": self.height,
            "weight": self.weight,
            "types": list(self.types),
            "abilities": [a.to_dict() for a in self.abilities],
            "sprites": self.sprites.to_dict(),
            "stats": [s.to_dict() for s in self.stats],
            "moves": list(self.moves),
            "species_url": self.species_url,
        }
        if self.species is not None:
            data["species"] = self.species.to_dict()
        return data


@dataclass(frozen=True)
class LookupResult:
    """Envelope returned for every lookup, successful or not."""

    ok: bool
    cached: bool = False
    data: Optional[Pokemon] = None
    error: Optional[str] = None
    status_code: int = 200

    @classmethod
    def success(cls, pokemon: Pokemon, cached: bool) -> "LookupResult":
        return cls(ok=True, cached=cached, data=pokemon)

    @classmethod
    def failure(cls, error: str, status_code: int) -> "LookupResult":
        return cls(ok=False, error=error, status_code=status_code)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": self.ok, "cached": self.cached}
        if self.data is not None:
            body["data"] = self.data.to_dict()
        if self.error is not None:
            body["error"] = self.error
        return body
