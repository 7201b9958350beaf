from __future__ import annotations

import logging
from typing import Sequence

from .config import CHUNK_SIZE
from .llm_adapter import LLMAdapter, LLMFallbackError
from .models import ScoreBatch, SingleReviewResult
from .parsing import clamp, extract_json_object, finite_numbers, round_half_up, string_items
from .prompts import CLASSIFIER_SYSTEM, SYSTEM_INSTRUCTION, build_batch_prompt, build_single_prompt

logger = logging.getLogger(__name__)

DEFAULT_VERDICT = "Unclear"
MAX_SIGNALS = 4


class ScoringEngine:
    """Fake-probability and sentiment estimates from the inference model."""

    def __init__(self, llm: LLMAdapter, *, chunk_size: int = CHUNK_SIZE) -> None:
        self._llm = llm
        self._chunk_size = chunk_size

    def score_batch(self, texts: Sequence[str]) -> ScoreBatch:
        """
        Score one chunk. Arrays are trimmed to the chunk length; shorter
        arrays contribute only the entries returned. Unusable output yields
        an empty batch.
        """
        if not texts:
            return ScoreBatch()
        if len(texts) > self._chunk_size:
            raise ValueError(f"Chunk of {len(texts)} exceeds chunk size {self._chunk_size}")
        try:
            output = self._llm.generate(
                build_batch_prompt(texts),
                system=SYSTEM_INSTRUCTION,
                max_tokens=400,
                temperature=0.0,
                top_p=0.9,
            )
        except LLMFallbackError as exc:
            logger.warning("Batch scoring failed for %d review(s): %s", len(texts), exc)
            return ScoreBatch()

        data = extract_json_object(output)
        if not data:
            logger.warning("Batch scoring returned no JSON object for %d review(s)", len(texts))
        fake_probs = data.get("fake_probs")
        sentiments = data.get("sentiments")
        if isinstance(fake_probs, list) and len(fake_probs) != len(texts):
            logger.warning("fake_probs has %d entries for %d reviews", len(fake_probs), len(texts))
        if isinstance(sentiments, list) and len(sentiments) != len(texts):
            logger.warning("sentiments has %d entries for %d reviews", len(sentiments), len(texts))
        return ScoreBatch(
            fake_probs=finite_numbers(fake_probs[: len(texts)] if isinstance(fake_probs, list) else None),
            sentiments=finite_numbers(sentiments[: len(texts)] if isinstance(sentiments, list) else None),
        )

    def score_single(self, text: str) -> SingleReviewResult:
        try:
            output = self._llm.generate(
                build_single_prompt(text),
                system=CLASSIFIER_SYSTEM,
                max_tokens=250,
                temperature=0.0,
                top_p=0.9,
            )
        except LLMFallbackError as exc:
            logger.warning("Single review scoring failed: %s", exc)
            output = ""

        data = extract_json_object(output)
        fake_prob = clamp(data.get("fake_prob"), 0.0, 1.0)
        sentiment = clamp(data.get("sentiment"), 0.0, 10.0)
        verdict = data.get("verdict")
        return SingleReviewResult(
            fake_percentage=round_half_up(fake_prob * 100),
            sentiment_score=round_half_up(sentiment, 1),
            verdict=verdict.strip() if isinstance(verdict, str) and verdict.strip() else DEFAULT_VERDICT,
            signals=string_items(data.get("signals"), MAX_SIGNALS),
        )
