"""
Canonical place catalog loader for shop-name resolution.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

from reviewscore.models import Place
from reviewscore.text import normalize_display

logger = logging.getLogger(__name__)

DEFAULT_PLACES: List[Dict[str, Any]] = [
    {"name": "The Italian Corner", "area": "Bukit Bintang"},
    {"name": "Hawker Hall", "area": "Petaling Jaya"},
    {"name": "Sushi Zanmai", "area": "Mid Valley"},
    {"name": "myBurgerLab", "area": "Seapark"},
    {"name": "Chatime", "area": "Pavilion"},
    {"name": "McDonald's", "area": "KLCC"},
    {"name": "BurgerLab", "area": "SS15"},
]

DEFAULT_ALIASES: Dict[str, str] = {
    "mcd": "McDonald's",
    "mcdonald": "McDonald's",
    "mcdonalds": "McDonald's",
    "mcdonald's": "McDonald's",
    "burger lab": "myBurgerLab",
    "myburgerlab": "myBurgerLab",
    "burgerlab": "BurgerLab",
    "zanmai": "Sushi Zanmai",
    "italian corner": "The Italian Corner",
}


def load_json(path: Path) -> Any:
    """Load a JSON file with UTF-8 encoding."""
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_places(raw: Any) -> List[Place]:
    places: List[Place] = []
    if not isinstance(raw, list):
        return places
    for entry in raw:
        if isinstance(entry, str) and entry.strip():
            places.append(Place(name=entry.strip()))
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str) and entry["name"].strip():
            places.append(
                Place(
                    name=entry["name"].strip(),
                    area=entry.get("area") or None,
                    place_id=entry.get("place_id") or None,
                )
            )
        else:
            logger.warning("Skip invalid place entry: %r", entry)
    return places


def _link_aliases(raw: Any, places: List[Place]) -> Dict[str, Place]:
    by_name = {normalize_display(place.name): place for place in places}
    aliases: Dict[str, Place] = {}
    if not isinstance(raw, dict):
        return aliases
    for alias, name in raw.items():
        place = by_name.get(normalize_display(name)) if isinstance(name, str) else None
        if place is None:
            logger.warning("Skip alias %r: unknown place %r", alias, name)
            continue
        aliases[normalize_display(alias)] = place
    return aliases


def build_catalog(data: Dict[str, Any]) -> Tuple[List[Place], Dict[str, Place]]:
    places = _parse_places(data.get("places"))
    return places, _link_aliases(data.get("aliases"), places)


def load_place_catalog(path: str | os.PathLike[str] | None) -> Tuple[List[Place], Dict[str, Place]]:
    """
    Load canonical places and their aliases from a JSON file shaped like
    {"places": [{"name", "area", "place_id"}], "aliases": {alias: name}}.
    An empty path selects the built-in catalog, which is also the fallback
    when the file is missing or unusable.
    """
    default = {"places": DEFAULT_PLACES, "aliases": DEFAULT_ALIASES}
    if not path:
        return build_catalog(default)

    data_path = Path(path)
    if not data_path.exists():
        logger.warning("Place catalog %s does not exist; using built-in catalog", data_path)
        return build_catalog(default)

    try:
        data = load_json(data_path)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load place catalog %s: %s; using built-in catalog", data_path, exc)
        return build_catalog(default)
    if not isinstance(data, dict):
        logger.warning("Place catalog %s is not a JSON object; using built-in catalog", data_path)
        return build_catalog(default)

    places, aliases = build_catalog(data)
    if not places:
        logger.warning("Place catalog %s has no places; using built-in catalog", data_path)
        return build_catalog(default)

    logger.info("Loaded place catalog %s (%d places, %d aliases)", data_path, len(places), len(aliases))
    return places, aliases
