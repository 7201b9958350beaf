"""
Layered translation to the target language.

Stages, each tried only when the previous one failed:
skip (already target language) -> service with detected source ->
service with auto-detected source -> inference model -> original text.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence

from .llm_adapter import LLMAdapter, LLMFallbackError
from .models import Outcome, TranslatedText
from .prompts import TRANSLATOR_SYSTEM, build_translate_prompt

logger = logging.getLogger(__name__)

AUTO_SOURCE = "auto"


def _primary_subtag(code: str) -> str:
    return code.strip().lower().replace("_", "-").split("-")[0]


class TranslationChain:
    def __init__(
        self,
        client: Any,
        llm: LLMAdapter,
        *,
        target_lang: str = "en",
        max_workers: int = 1,
    ) -> None:
        self._client = client
        self._llm = llm
        self._target = target_lang
        self._executor = ThreadPoolExecutor(max_workers=max_workers) if max_workers > 1 else None

    def needs_translation(self, lang: str | None) -> bool:
        if not lang or not lang.strip():
            return False
        return _primary_subtag(lang) != _primary_subtag(self._target)

    def translate(self, text: str, lang: str | None) -> TranslatedText:
        """Best-effort translation; never raises."""
        if not self.needs_translation(lang):
            return TranslatedText(text=text, translated=False)

        stages: list[tuple[str, Callable[[], Outcome[str]]]] = [
            ("direct", lambda: self._service_translate(text, lang)),
            ("auto-detect", lambda: self._service_translate(text, AUTO_SOURCE)),
            ("model", lambda: self._model_translate(text)),
        ]
        for stage, attempt in stages:
            outcome = attempt()
            if not outcome.degraded:
                result = outcome.value or text
                return TranslatedText(text=result, translated=result != text)
            logger.warning("Translation stage %s failed (source=%s): %s", stage, lang, outcome.error)

        logger.error("All translation stages failed (source=%s); keeping original text", lang)
        return TranslatedText(text=text, translated=False)

    def translate_many(self, texts: Sequence[str], langs: Sequence[str | None]) -> list[TranslatedText]:
        """Translate item by item; output order matches input order."""
        if self._executor is not None and len(texts) > 1:
            return list(self._executor.map(self.translate, texts, langs))
        return [self.translate(text, lang) for text, lang in zip(texts, langs)]

    def _service_translate(self, text: str, source: str) -> Outcome[str]:
        try:
            response = self._client.translate_text(
                Text=text,
                SourceLanguageCode=source,
                TargetLanguageCode=self._target,
            )
        except Exception as exc:
            return Outcome.failed(exc)
        return Outcome.ok(response.get("TranslatedText") or "")

    def _model_translate(self, text: str) -> Outcome[str]:
        try:
            output = self._llm.generate(
                build_translate_prompt(text, self._target),
                system=TRANSLATOR_SYSTEM,
                max_tokens=400,
                temperature=0.0,
            )
        except LLMFallbackError as exc:
            return Outcome.failed(exc)
        return Outcome.ok(output.strip())
