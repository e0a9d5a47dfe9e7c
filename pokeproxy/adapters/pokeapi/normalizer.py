"""
PokeAPI normalizer.

Maps the raw ``/pokemon/{name}`` and ``/pokemon-species/{id}`` documents onto
the stable domain schema. Required fields are checked one by one and any gap
raises ``MalformedUpstreamError`` naming the offending field; optional fields
fall back to None or an empty sequence.
"""
import re
from typing import Any, Dict, List, Mapping, Optional

from pokeproxy.adapters.interfaces.normalizer import DataNormalizer
from pokeproxy.core.exceptions import MalformedUpstreamError
from pokeproxy.domain.models import (
    Ability,
    FlavorText,
    Pokemon,
    SpeciesInfo,
    Sprites,
    Stat,
)

MOVES_SAMPLE_SIZE = 8
FLAVOR_TEXT_LIMIT = 3

_LINE_BREAKS = re.compile(r"[\n\f]")

# Lists arrive as tuples when a document is served from the cache
_SEQUENCE_TYPES = (list, tuple)


def _require(raw: Mapping[str, Any], field: str) -> Any:
    if field not in raw or raw[field] is None:
        raise MalformedUpstreamError(f"Upstream response is missing '{field}'", field=field)
    return raw[field]


def _require_list(raw: Mapping[str, Any], field: str) -> List[Any]:
    value = _require(raw, field)
    if not isinstance(value, _SEQUENCE_TYPES):
        raise MalformedUpstreamError(f"Upstream field '{field}' is not a list", field=field)
    return value


def _nested(value: Any, *path: str) -> Any:
    """Walk nested mappings, returning None as soon as a step is missing."""
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _nested_required(value: Any, field: str, *path: str) -> Any:
    found = _nested(value, *path)
    if found is None:
        raise MalformedUpstreamError(
            f"Upstream field '{field}' has an entry without {'.'.join(path)}",
            field=field
        )
    return found


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def clean_flavor_text(text: str) -> str:
    """Replace every newline and form feed with a single space."""
    return _LINE_BREAKS.sub(" ", text)


class PokemonNormalizer(DataNormalizer[Dict[str, Any], Pokemon, SpeciesInfo]):
    """Pure transform from PokeAPI documents to domain models."""

    def __init__(self, moves_sample_size: int = MOVES_SAMPLE_SIZE, flavor_text_limit: int = FLAVOR_TEXT_LIMIT):
        self.moves_sample_size = moves_sample_size
        self.flavor_text_limit = flavor_text_limit

    def normalize_primary(self, raw_data: Dict[str, Any]) -> Pokemon:
        if not isinstance(raw_data, Mapping):
            raise MalformedUpstreamError("Upstream Pokemon document is not an object")

        pokemon_id = _require(raw_data, "id")
        if isinstance(pokemon_id, bool) or not isinstance(pokemon_id, int):
            raise MalformedUpstreamError("Upstream field 'id' is not an integer", field="id")

        name = _require(raw_data, "name")

        types = tuple(
            _nested_required(entry, "types", "type", "name")
            for entry in _require_list(raw_data, "types")
        )

        abilities = tuple(
            Ability(
                name=_nested_required(entry, "abilities", "ability", "name"),
                is_hidden=bool(entry.get("is_hidden", False)),
            )
            for entry in _require_list(raw_data, "abilities")
        )

        sprites_raw = _require(raw_data, "sprites")
        if not isinstance(sprites_raw, Mapping):
            raise MalformedUpstreamError("Upstream field 'sprites' is not an object", field="sprites")
        sprites = Sprites(
            front_default=sprites_raw.get("front_default"),
            official_artwork=_nested(sprites_raw, "other", "official-artwork", "front_default") or None,
        )

        stats = tuple(
            Stat(
                name=_nested_required(entry, "stats", "stat", "name"),
                base=_nested_required(entry, "stats", "base_stat"),
            )
            for entry in _require_list(raw_data, "stats")
        )

        moves_raw = raw_data.get("moves")
        if not isinstance(moves_raw, _SEQUENCE_TYPES):
            moves_raw = []
        moves = tuple(
            name
            for name in (_nested(entry, "move", "name") for entry in moves_raw[:self.moves_sample_size])
            if name is not None
        )

        return Pokemon(
            id=pokemon_id,
            name=name,
            height=raw_data.get("height"),
            weight=raw_data.get("weight"),
            types=types,
            abilities=abilities,
            sprites=sprites,
            stats=stats,
            moves=moves,
            species_url=_optional_str(_nested(raw_data, "species", "url")),
        )

    def normalize_enrichment(self, raw_data: Dict[str, Any]) -> SpeciesInfo:
        if not isinstance(raw_data, Mapping):
            raise MalformedUpstreamError("Upstream species document is not an object")

        entries = raw_data.get("flavor_text_entries") or []
        if not isinstance(entries, _SEQUENCE_TYPES):
            raise MalformedUpstreamError(
                "Upstream field 'flavor_text_entries' is not a list",
                field="flavor_text_entries"
            )

        flavor_texts = []
        for entry in entries[:self.flavor_text_limit]:
            text = _nested_required(entry, "flavor_text_entries", "flavor_text")
            flavor_texts.append(
                FlavorText(
                    flavor=clean_flavor_text(str(text)),
                    language=_nested(entry, "language", "name"),
                )
            )

        return SpeciesInfo(
            color=_nested(raw_data, "color", "name"),
            habitat=_nested(raw_data, "habitat", "name"),
            flavor_text_entries=tuple(flavor_texts),
        )

