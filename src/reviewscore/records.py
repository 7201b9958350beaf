"""
Paginated scan of the review table with fuzzy shop-name filtering.

Rows have no fixed schema: the shop name and review body are read through
ordered lists of accepted column spellings, matched without regard to case
or whitespace.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator, Mapping, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from .config import HARD_CAP_REVIEWS
from .fuzzy import edit_distance, names_match, similarity_ratio
from .models import MatchCandidate
from .text import normalize_key

logger = logging.getLogger(__name__)

NAME_KEYS = (
    "name", "shop", "shopname", "shop_name", "place", "place_name",
    "business", "business_name", "title", "company", "company_name",
)
REVIEW_KEYS = (
    "review_text", "reviewText", "review text", "review", "text", "content",
    "comment", "body", "snippet", "opinion", "Review Text", "Reviews", "review_body",
)

_WHITESPACE = re.compile(r"\s+")


class StoreError(RuntimeError):
    """Raised when a page of the record store cannot be read."""


def _fold_key(key: str) -> str:
    return _WHITESPACE.sub("", key.lower())


class FieldReader:
    """Tolerant column lookup over one record; the key map is built once."""

    def __init__(self, record: Mapping[str, Any]) -> None:
        self._record = record
        self._keys = {_fold_key(str(key)): key for key in record}

    def read(self, candidates: Sequence[str]) -> Any:
        for candidate in candidates:
            key = self._keys.get(_fold_key(candidate))
            if key is not None and self._record[key] is not None:
                return self._record[key]
        return None


class RecordScanner:
    def __init__(self, table: Any, *, hard_cap: int = HARD_CAP_REVIEWS) -> None:
        self._table = table
        self._hard_cap = hard_cap

    def scan(self, shop_name: str) -> list[str]:
        """Collect review texts of every row whose name matches shop_name."""
        target = normalize_key(shop_name)
        matched: list[str] = []
        pages = 0
        for page in self._pages():
            pages += 1
            for row in page:
                reader = FieldReader(row)
                name = reader.read(NAME_KEYS)
                if not name:
                    continue
                candidate = self._candidate(row, normalize_key(name), target)
                if not names_match(candidate.normalized_name, target, candidate.edit_distance):
                    continue
                text = reader.read(REVIEW_KEYS)
                if isinstance(text, str) and text.strip():
                    matched.append(text.strip())
                    if len(matched) >= self._hard_cap:
                        break
            if len(matched) >= self._hard_cap:
                logger.info("Hard cap of %d reviews reached for %r", self._hard_cap, shop_name)
                break
        logger.info("Scanned %d page(s), %d review(s) matched %r", pages, len(matched), shop_name)
        return matched

    def _pages(self) -> Iterator[list[Mapping[str, Any]]]:
        start_key = None
        while True:
            kwargs = {"ExclusiveStartKey": start_key} if start_key else {}
            try:
                response = self._table.scan(**kwargs)
            except (BotoCoreError, ClientError) as exc:
                raise StoreError(f"Record store scan failed: {exc}") from exc
            yield response.get("Items") or []
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                return

    @staticmethod
    def _candidate(row: Mapping[str, Any], name: str, target: str) -> MatchCandidate:
        distance = edit_distance(name, target)
        return MatchCandidate(
            record=row,
            normalized_name=name,
            edit_distance=distance,
            similarity_ratio=similarity_ratio(name, target, distance),
        )
