"""
Prompt templates sent to the inference model.
"""

from __future__ import annotations

from typing import Sequence

SYSTEM_INSTRUCTION = """You are a fact-checking and review-quality analyst.
Given a shop name and one or more user reviews, you will:
1) Estimate the percentage of likely fake/low-credibility reviews (0-100).
2) Produce an overall sentiment score from 0.0 to 10.0.
3) Return a verdict tag in ["Worth a Go!", "Mixed", "Avoid"].
4) Extract up to 4 concise pros and 4 concise cons.

Strictly output valid JSON matching this schema:
{
  "fakeRatePct": number,
  "sentimentScore": number,
  "verdict": string,
  "pros": string[],
  "cons": string[]
}

Guidelines:
- Use linguistic signals (repetition, overpromotion, bot-like patterns), contradictions across reviews, and plausibility checks.
- Be conservative: do not call something fake without signals.
- Keep items short for UI tiles."""

CLASSIFIER_SYSTEM = "You are a precise JSON-only classifier."

TRANSLATOR_SYSTEM = "You are a precise translator. Output only the translation."

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ms": "Malay",
    "id": "Indonesian",
    "vi": "Vietnamese",
    "th": "Thai",
}


def build_shop_prompt(shop_name: str, reviews_text: str) -> str:
    return (
        f"SHOP NAME: {shop_name or 'N/A'}\n"
        f"REVIEWS:\n{reviews_text.strip() or '(none provided)'}\n\n"
        "Return ONLY the JSON object, no extra words."
    )


def build_batch_prompt(reviews: Sequence[str]) -> str:
    numbered = "\n\n".join(f"{index}. {text}" for index, text in enumerate(reviews, start=1))
    return f"""You are a review authenticity and sentiment scorer.
For EACH review below, return strict JSON:

{{
  "fake_probs": [p1, p2, ...],
  "sentiments": [s1, s2, ...]
}}

fake_probs: 0.0 (definitely real) .. 1.0 (definitely fake). sentiments: 0..10 per review.
Rules: arrays MUST match the number & order of reviews ({len(reviews)} reviews). Numbers only. Return ONLY JSON.
REVIEWS:
{numbered}"""


def build_single_prompt(review_text: str) -> str:
    return f"""Classify ONE customer review for authenticity and sentiment.
Return ONLY this JSON:
{{
  "fake_prob": <0..1>,
  "sentiment": <0..10>,
  "verdict": "Likely Fake" | "Unclear" | "Likely Real",
  "signals": ["short reason 1", "short reason 2"]
}}
Review:
{review_text}"""


def build_translate_prompt(text: str, target_lang: str) -> str:
    language = LANGUAGE_NAMES.get(target_lang.split("-")[0].lower(), target_lang)
    return (
        f"Translate this text to {language}. "
        "Return ONLY the translation with no extra words.\n\n"
        f"{text}"
    )
