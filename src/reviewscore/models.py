from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .text import sanitize_review_text

T = TypeVar("T")

NOT_ENOUGH_DATA = "Not enough data"
SHOP_VERDICTS = ("Worth a Go!", "Mixed", "Avoid")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(_CamelModel):
    """Body of an analysis request; non-string values count as absent."""

    review_text: str | None = None
    shop_name: str | None = None

    @field_validator("review_text", mode="before")
    @classmethod
    def _clean_review_text(cls, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        return sanitize_review_text(value) or None

    @field_validator("shop_name", mode="before")
    @classmethod
    def _clean_shop_name(cls, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        return value.strip() or None


class SingleReviewResult(_CamelModel):
    fake_percentage: int = Field(0, ge=0, le=100)
    sentiment_score: float = Field(0.0, ge=0.0, le=10.0)
    verdict: str = "Unclear"
    signals: list[str] = Field(default_factory=list, max_length=4)


class SingleReviewResponse(_CamelModel):
    review_text: str
    detected_language: str
    translated_for_bedrock: bool
    english_text: str
    fake_percentage: int = Field(..., ge=0, le=100)
    sentiment_score: float = Field(..., ge=0.0, le=10.0)
    verdict: str
    signals: list[str] = Field(default_factory=list, max_length=4)


class ShopAnalysisResult(_CamelModel):
    shop_name: str
    fake_percentage: int = Field(0, ge=0, le=100)
    sentiment_score: float = Field(0.0, ge=0.0, le=10.0)
    reviews_analyzed: int = Field(0, ge=0)
    recommendation: str = "Mixed"
    pros: list[str] = Field(default_factory=list, max_length=4)
    cons: list[str] = Field(default_factory=list, max_length=4)

    @classmethod
    def not_enough_data(cls, shop_name: str, reviews_analyzed: int) -> "ShopAnalysisResult":
        return cls(
            shop_name=shop_name,
            reviews_analyzed=reviews_analyzed,
            recommendation=NOT_ENOUGH_DATA,
        )


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Value of an outbound call, or the reason it degraded."""

    value: T | None = None
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    def or_default(self, default: T) -> T:
        if self.degraded or self.value is None:
            return default
        return self.value

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error: BaseException | str) -> "Outcome[T]":
        return cls(error=str(error) or type(error).__name__)


@dataclass(frozen=True)
class MatchCandidate:
    record: Mapping[str, Any]
    normalized_name: str
    edit_distance: int
    similarity_ratio: float


@dataclass(frozen=True)
class TranslatedText:
    text: str
    translated: bool = False


@dataclass
class ScoreBatch:
    """Chunk-aligned model scores; empty lists mean the chunk contributed nothing."""

    fake_probs: list[float] = field(default_factory=list)
    sentiments: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class Summary:
    recommendation: str = "Mixed"
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Place:
    name: str
    area: str | None = None
    place_id: str | None = None
