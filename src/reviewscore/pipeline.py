"""
Request orchestration: validate, then either classify one review or
aggregate every review stored for a shop.
"""

from __future__ import annotations

import logging
import time

from .aggregator import ScoreAccumulator, Summarizer
from .clients import ServiceClients
from .config import CHUNK_SIZE, MIN_REVIEWS, Settings
from .fuzzy import CanonicalResolver
from .language import LanguageDetector
from .llm_adapter import LLMAdapter
from .models import AnalyzeRequest, ShopAnalysisResult, SingleReviewResponse
from .records import RecordScanner
from .scoring import ScoringEngine
from .translation import TranslationChain

logger = logging.getLogger(__name__)


class MissingInputError(ValueError):
    """Neither a review text nor a shop name was supplied."""


class ReviewAnalyzer:
    def __init__(
        self,
        *,
        scanner: RecordScanner,
        detector: LanguageDetector,
        translator: TranslationChain,
        scorer: ScoringEngine,
        summarizer: Summarizer,
        resolver: CanonicalResolver | None = None,
        chunk_size: int = CHUNK_SIZE,
        min_reviews: int = MIN_REVIEWS,
    ) -> None:
        self._scanner = scanner
        self._detector = detector
        self._translator = translator
        self._scorer = scorer
        self._summarizer = summarizer
        self._resolver = resolver
        self._chunk_size = chunk_size
        self._min_reviews = min_reviews

    def analyze(self, request: AnalyzeRequest) -> SingleReviewResponse | ShopAnalysisResult:
        if request.review_text:
            return self.analyze_review(request.review_text)
        if request.shop_name:
            return self.analyze_shop(request.shop_name)
        raise MissingInputError("Provide either reviewText or shopName")

    def analyze_review(self, review_text: str) -> SingleReviewResponse:
        language = self._detector.detect(review_text)
        translation = self._translator.translate(review_text, language)
        english_text = translation.text if translation.translated else review_text
        result = self._scorer.score_single(english_text)
        logger.info(
            "Single review scored (lang=%s, translated=%s, fake=%d%%)",
            language,
            translation.translated,
            result.fake_percentage,
        )
        return SingleReviewResponse(
            review_text=review_text,
            detected_language=language,
            translated_for_bedrock=translation.translated,
            english_text=english_text,
            **result.model_dump(),
        )

    def resolve_shop_name(self, query: str) -> str:
        if self._resolver is None:
            return query
        place = self._resolver.resolve(query)
        if place is None:
            return query
        if place.name != query:
            logger.info("Interpreting shop query %r as %r", query, place.name)
        return place.name

    def analyze_shop(self, query: str) -> ShopAnalysisResult:
        started = time.monotonic()
        shop_name = self.resolve_shop_name(query)
        reviews = self._scanner.scan(shop_name)
        if len(reviews) < self._min_reviews:
            logger.info("Only %d review(s) for %r; not enough data", len(reviews), shop_name)
            return ShopAnalysisResult.not_enough_data(shop_name, len(reviews))

        languages = self._detector.detect_batch(reviews)
        accumulator = ScoreAccumulator()
        english_corpus: list[str] = []
        for start in range(0, len(reviews), self._chunk_size):
            chunk = reviews[start:start + self._chunk_size]
            translations = self._translator.translate_many(chunk, languages[start:start + self._chunk_size])
            english_chunk = [item.text for item in translations]
            english_corpus.extend(english_chunk)
            accumulator.add(self._scorer.score_batch(english_chunk))

        summary = self._summarizer.summarize(shop_name, english_corpus)
        fake_samples, sentiment_samples = accumulator.sample_counts
        logger.info(
            "Shop %r analyzed: %d review(s), %d fake / %d sentiment sample(s) in %.2fs",
            shop_name,
            len(reviews),
            fake_samples,
            sentiment_samples,
            time.monotonic() - started,
        )
        return ShopAnalysisResult(
            shop_name=shop_name,
            fake_percentage=accumulator.fake_percentage(),
            sentiment_score=accumulator.sentiment_score(),
            reviews_analyzed=len(reviews),
            recommendation=summary.recommendation,
            pros=summary.pros,
            cons=summary.cons,
        )


def build_analyzer(
    clients: ServiceClients,
    settings: Settings,
    resolver: CanonicalResolver | None = None,
) -> ReviewAnalyzer:
    llm = LLMAdapter(clients.bedrock, settings.bedrock_model_id)
    return ReviewAnalyzer(
        scanner=RecordScanner(clients.table),
        detector=LanguageDetector(clients.comprehend),
        translator=TranslationChain(
            clients.translate,
            llm,
            target_lang=settings.translate_target_lang,
            max_workers=settings.translate_workers,
        ),
        scorer=ScoringEngine(llm),
        summarizer=Summarizer(llm),
        resolver=resolver,
    )
