"""
Edit-distance matching for shop names and canonical place resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from .models import Place
from .text import normalize_display

logger = logging.getLogger(__name__)

SHORT_NAME_LENGTH = 8
ACCEPT_RATIO = 0.90
ACCEPT_DISTANCE = 2
AMBIGUITY_GAP = 0.06


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance using a single rolling row."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    row = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        prev = row[0]
        row[0] = i
        for j, char_b in enumerate(b, start=1):
            current = row[j]
            cost = 0 if char_a == char_b else 1
            row[j] = min(row[j] + 1, row[j - 1] + 1, prev + cost)
            prev = current
    return row[-1]


def similarity_ratio(a: str, b: str, distance: int | None = None) -> float:
    if not a and not b:
        return 1.0
    if distance is None:
        distance = edit_distance(a, b)
    return 1 - distance / max(len(a), len(b), 1)


def names_match(a: str, b: str, distance: int | None = None) -> bool:
    """
    Recall-leaning equality for normalized names: substring containment,
    otherwise distance <= 1 for short names and <= 2 for longer ones.
    """
    if not a or not b:
        return False
    if a in b or b in a:
        return True
    if distance is None:
        distance = edit_distance(a, b)
    if max(len(a), len(b)) <= SHORT_NAME_LENGTH:
        return distance <= 1
    return distance <= 2


@dataclass(frozen=True)
class _ScoredPlace:
    place: Place
    distance: int
    ratio: float


class CanonicalResolver:
    """Resolve a free-text shop query to a canonical place, or decline."""

    def __init__(self, places: Iterable[Place], aliases: Mapping[str, Place] | None = None) -> None:
        self._places = list(places)
        self._aliases = {normalize_display(alias): place for alias, place in (aliases or {}).items()}
        self._normalized = [(place, normalize_display(place.name)) for place in self._places]

    def resolve(self, query: str) -> Place | None:
        key = normalize_display(query)
        if not key:
            return None
        if key in self._aliases:
            return self._aliases[key]
        return self.find_near_exact(key)

    def find_near_exact(self, key: str) -> Place | None:
        for place, name in self._normalized:
            if name == key:
                return place

        scored = []
        for place, name in self._normalized:
            distance = edit_distance(key, name)
            scored.append(_ScoredPlace(place, distance, similarity_ratio(key, name, distance)))
        if not scored:
            return None
        scored.sort(key=lambda item: (-item.ratio, item.distance))

        best = scored[0]
        if best.ratio < ACCEPT_RATIO or best.distance > ACCEPT_DISTANCE:
            return None
        if len(scored) > 1 and best.ratio - scored[1].ratio < AMBIGUITY_GAP:
            logger.debug("Ambiguous place query %r: %s vs %s", key, best.place.name, scored[1].place.name)
            return None
        return best.place
