"""
String canonicalization used for shop-name comparison and place lookup.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_CURLY_QUOTES = re.compile("[\u2018\u2019`\u201c\u201d]")
_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")
_WHITESPACE = re.compile(r"\s+")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_key(value: Any) -> str:
    """Lowercase and keep only [a-z0-9]; the key used to compare shop names."""
    return _NON_ALNUM.sub("", _as_text(value).lower())


def normalize_display(value: Any) -> str:
    """
    Looser canonical form for place names: NFKC fold, lowercase, straight
    quotes, no zero-width characters, single spaces.
    """
    text = unicodedata.normalize("NFKC", _as_text(value)).lower()
    text = _CURLY_QUOTES.sub("'", text)
    text = _ZERO_WIDTH.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def sanitize_review_text(value: str) -> str:
    """Drop a leading BOM and surrounding whitespace."""
    if value.startswith("\ufeff"):
        value = value[1:]
    return value.strip()
