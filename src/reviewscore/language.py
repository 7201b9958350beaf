from __future__ import annotations

import logging
from typing import Any, Sequence

from .config import LANGUAGE_BATCH_LIMIT
from .models import Outcome

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


def _top_language(languages: Any) -> str | None:
    if not isinstance(languages, list):
        return None
    ranked = sorted(
        (item for item in languages if isinstance(item, dict)),
        key=lambda item: item.get("Score") or 0,
        reverse=True,
    )
    if ranked and ranked[0].get("LanguageCode"):
        return str(ranked[0]["LanguageCode"])
    return None


class LanguageDetector:
    """Dominant-language lookup over a Comprehend client; never raises."""

    def __init__(
        self,
        client: Any,
        *,
        default: str = DEFAULT_LANGUAGE,
        batch_limit: int = LANGUAGE_BATCH_LIMIT,
    ) -> None:
        self._client = client
        self._default = default
        self._batch_limit = max(1, batch_limit)

    def detect(self, text: str) -> str:
        outcome = self._detect_one(text)
        if outcome.degraded:
            logger.warning("Language detection failed, assuming %s: %s", self._default, outcome.error)
        return outcome.or_default(self._default)

    def detect_batch(self, texts: Sequence[str]) -> list[str]:
        """One code per input text, aligned by index."""
        codes = [self._default] * len(texts)
        for offset in range(0, len(texts), self._batch_limit):
            window = list(texts[offset:offset + self._batch_limit])
            outcome = self._detect_window(window)
            if outcome.degraded:
                logger.warning(
                    "Batch language detection failed for items %d-%d, assuming %s: %s",
                    offset,
                    offset + len(window) - 1,
                    self._default,
                    outcome.error,
                )
                continue
            for index, code in outcome.value.items():
                if 0 <= index < len(window):
                    codes[offset + index] = code
        return codes

    def _detect_one(self, text: str) -> Outcome[str]:
        try:
            response = self._client.detect_dominant_language(Text=text)
        except Exception as exc:
            return Outcome.failed(exc)
        return Outcome(value=_top_language(response.get("Languages")))

    def _detect_window(self, texts: list[str]) -> Outcome[dict[int, str]]:
        try:
            response = self._client.batch_detect_dominant_language(TextList=texts)
        except Exception as exc:
            return Outcome.failed(exc)
        found: dict[int, str] = {}
        for result in response.get("ResultList") or []:
            index = result.get("Index")
            code = _top_language(result.get("Languages"))
            if isinstance(index, int) and code:
                found[index] = code
        return Outcome.ok(found)
