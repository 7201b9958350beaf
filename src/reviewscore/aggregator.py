from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .config import SUMMARY_MAX_CHARS
from .llm_adapter import LLMAdapter, LLMFallbackError
from .models import SHOP_VERDICTS, ScoreBatch, Summary
from .parsing import extract_json_object, round_half_up, string_items
from .prompts import SYSTEM_INSTRUCTION, build_shop_prompt

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION = "Mixed"
MAX_ITEMS = 4


class ScoreAccumulator:
    """Pools valid per-review samples across every chunk of a request."""

    def __init__(self) -> None:
        self._fake: list[float] = []
        self._sentiment: list[float] = []

    def add(self, batch: ScoreBatch) -> None:
        self._fake.extend(batch.fake_probs)
        self._sentiment.extend(batch.sentiments)

    @property
    def sample_counts(self) -> tuple[int, int]:
        return len(self._fake), len(self._sentiment)

    def fake_percentage(self) -> int:
        if not self._fake:
            return 0
        mean = float(np.clip(np.mean(self._fake), 0.0, 1.0))
        return round_half_up(mean * 100)

    def sentiment_score(self) -> float:
        if not self._sentiment:
            return 0.0
        mean = float(np.clip(np.mean(self._sentiment), 0.0, 10.0))
        return round_half_up(mean, 1)


def _canonical_verdict(value: object) -> str:
    if isinstance(value, str):
        folded = value.strip().lower()
        for verdict in SHOP_VERDICTS:
            if verdict.lower() == folded:
                return verdict
    return DEFAULT_RECOMMENDATION


class Summarizer:
    """Qualitative verdict with pros and cons over the whole review corpus."""

    def __init__(self, llm: LLMAdapter, *, max_chars: int = SUMMARY_MAX_CHARS) -> None:
        self._llm = llm
        self._max_chars = max_chars

    def summarize(self, shop_name: str, reviews: Sequence[str]) -> Summary:
        corpus = "\n\n".join(reviews)
        if len(corpus) > self._max_chars:
            corpus = corpus[: self._max_chars]
        prompt = f"{build_shop_prompt(shop_name, corpus)}\n\nReturn ONLY the JSON."
        try:
            output = self._llm.generate(
                prompt,
                system=SYSTEM_INSTRUCTION,
                max_tokens=500,
                temperature=0.2,
                top_p=0.9,
            )
        except LLMFallbackError as exc:
            logger.warning("Summary for %r failed, using defaults: %s", shop_name, exc)
            return Summary()

        data = extract_json_object(output)
        if not data:
            logger.warning("Summary for %r returned no JSON object", shop_name)
        return Summary(
            recommendation=_canonical_verdict(data.get("verdict")),
            pros=string_items(data.get("pros"), MAX_ITEMS),
            cons=string_items(data.get("cons"), MAX_ITEMS),
        )
