"""
Best-effort reading of JSON answers embedded in free-form model output.
Nothing here raises on bad input; callers get empty or default values.
"""

from __future__ import annotations

import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Iterator

MAX_SCAN_CHARS = 20000


def _object_spans(text: str) -> Iterator[str]:
    """Yield balanced top-level {...} substrings, first to last."""
    limit = min(len(text), MAX_SCAN_CHARS)
    start = text.find("{", 0, limit)
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        end = None
        for index in range(start, limit):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = index
                    break
        if end is None:
            return
        yield text[start:end + 1]
        start = text.find("{", end + 1, limit)


def extract_json_object(text: Any) -> dict[str, Any]:
    """Return the first JSON object found in text, or {} when there is none."""
    if not isinstance(text, str):
        return {}
    for span in _object_spans(text):
        try:
            value = json.loads(span)
        except ValueError:
            continue
        if isinstance(value, dict):
            return value
    return {}


def to_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def finite_numbers(values: Any) -> list[float]:
    """Numeric, finite entries of a list; anything else is dropped."""
    if not isinstance(values, list):
        return []
    numbers = (to_number(value) for value in values)
    return [number for number in numbers if number is not None]


def clamp(value: Any, lo: float, hi: float) -> float:
    number = to_number(value)
    if number is None:
        return lo
    return min(hi, max(lo, number))


def round_half_up(value: float, digits: int = 0) -> int | float:
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def string_items(values: Any, limit: int = 4) -> list[str]:
    if not isinstance(values, list):
        return []
    items: Iterable[str] = (value.strip() for value in values if isinstance(value, str))
    return [item for item in items if item][:limit]
