"""
In-process stand-ins for the AWS clients, exposing the boto3 method names.
"""

import json
from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import ClientError

from reviewscore.aggregator import Summarizer
from reviewscore.fuzzy import CanonicalResolver
from reviewscore.language import LanguageDetector
from reviewscore.llm_adapter import LLMFallbackError
from reviewscore.pipeline import ReviewAnalyzer
from reviewscore.records import RecordScanner
from reviewscore.scoring import ScoringEngine
from reviewscore.translation import TranslationChain


def service_error(operation: str, code: str = "ServiceUnavailable") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{operation} unavailable"}}, operation)


class FakeTable:
    """DynamoDB Table stand-in serving fixed pages."""

    def __init__(self, pages: List[List[Dict[str, Any]]], fail_on_page: Optional[int] = None):
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.calls: List[Dict[str, Any]] = []

    def scan(self, **kwargs):
        index = len(self.calls)
        self.calls.append(kwargs)
        if self.fail_on_page == index:
            raise service_error("Scan", "ProvisionedThroughputExceededException")
        response: Dict[str, Any] = {"Items": self.pages[index] if index < len(self.pages) else []}
        if index < len(self.pages) - 1:
            response["LastEvaluatedKey"] = {"id": f"page-{index + 1}"}
        return response


class FakeComprehend:
    """Comprehend stand-in; codes maps text -> language code."""

    def __init__(self, codes: Optional[Dict[str, str]] = None, fail: bool = False):
        self.codes = codes or {}
        self.fail = fail
        self.single_calls = 0
        self.batch_calls: List[List[str]] = []

    def _languages(self, text: str):
        code = self.codes.get(text, "en")
        return [{"LanguageCode": "xx", "Score": 0.01}, {"LanguageCode": code, "Score": 0.98}]

    def detect_dominant_language(self, Text: str):
        self.single_calls += 1
        if self.fail:
            raise service_error("DetectDominantLanguage")
        return {"Languages": self._languages(Text)}

    def batch_detect_dominant_language(self, TextList: List[str]):
        self.batch_calls.append(list(TextList))
        if self.fail:
            raise service_error("BatchDetectDominantLanguage")
        return {
            "ResultList": [
                {"Index": index, "Languages": self._languages(text)} for index, text in enumerate(TextList)
            ],
            "ErrorList": [],
        }


class FakeTranslate:
    """Amazon Translate stand-in; fail_sources lists source codes that error ("*" for all)."""

    def __init__(self, fail_sources=(), prefix: str = "EN: "):
        self.fail_sources = set(fail_sources)
        self.prefix = prefix
        self.calls: List[Dict[str, str]] = []

    def translate_text(self, Text: str, SourceLanguageCode: str, TargetLanguageCode: str):
        self.calls.append(
            {"Text": Text, "SourceLanguageCode": SourceLanguageCode, "TargetLanguageCode": TargetLanguageCode}
        )
        if SourceLanguageCode in self.fail_sources or "*" in self.fail_sources:
            raise service_error("TranslateText", "UnsupportedLanguagePairException")
        return {"TranslatedText": f"{self.prefix}{Text}"}


class StubLLM:
    """LLMAdapter stand-in routing prompts to canned answers."""

    def __init__(self, router: Callable[[str], Any]):
        self.router = router
        self.prompts: List[str] = []

    def generate(self, prompt, *, system, max_tokens=400, temperature=0.0, top_p=None):
        self.prompts.append(prompt)
        answer = self.router(prompt)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def count(self, marker: str) -> int:
        return sum(1 for prompt in self.prompts if marker in prompt)


BATCH_MARKER = "review authenticity and sentiment scorer"
SINGLE_MARKER = "Classify ONE customer review"
SUMMARY_MARKER = "SHOP NAME:"
TRANSLATE_MARKER = "Translate this text"


def numbered_count(prompt: str) -> int:
    reviews = prompt.split("REVIEWS:\n", 1)[-1]
    return sum(1 for block in reviews.split("\n\n") if block.strip())


def default_router(prompt: str):
    if BATCH_MARKER in prompt:
        count = numbered_count(prompt)
        return "Scores follow:\n" + json.dumps({"fake_probs": [0.2] * count, "sentiments": [8] * count})
    if SINGLE_MARKER in prompt:
        return json.dumps(
            {"fake_prob": 0.73, "sentiment": 6.44, "verdict": "Likely Fake", "signals": ["generic praise"]}
        )
    if SUMMARY_MARKER in prompt:
        return json.dumps({"verdict": "Worth a Go!", "pros": ["Tasty"], "cons": ["Slow service"]})
    if TRANSLATE_MARKER in prompt:
        return "model translation"
    return LLMFallbackError("unexpected prompt")


def shop_rows(name: str, count: int, key: str = "review_text") -> List[Dict[str, Any]]:
    return [{"shop_name": name, key: f"{name} review {i}"} for i in range(count)]


def make_analyzer(
    table: FakeTable,
    comprehend: Optional[FakeComprehend] = None,
    translate: Optional[FakeTranslate] = None,
    llm: Optional[StubLLM] = None,
    resolver: Optional[CanonicalResolver] = None,
) -> ReviewAnalyzer:
    llm = llm or StubLLM(default_router)
    return ReviewAnalyzer(
        scanner=RecordScanner(table),
        detector=LanguageDetector(comprehend or FakeComprehend()),
        translator=TranslationChain(translate or FakeTranslate(), llm),  # type: ignore[arg-type]
        scorer=ScoringEngine(llm),  # type: ignore[arg-type]
        summarizer=Summarizer(llm),  # type: ignore[arg-type]
        resolver=resolver,
    )
