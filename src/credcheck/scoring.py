from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .extractors import ImageFeatures, TextFeatures, UrlFeatures
from .models import Sentiment


@dataclass(frozen=True)
class TextScore:
    credibility: float
    sentiment: Sentiment
    sentiment_score: float


class CredibilityScorer(Protocol):
    """Stands in for a model backend. Every score must land in [0, 1]."""

    async def score_text(self, features: TextFeatures) -> TextScore: ...

    async def score_image(self, features: ImageFeatures) -> float: ...

    async def score_url(self, features: UrlFeatures) -> float: ...

    async def detect_url_bias(self, features: UrlFeatures) -> bool: ...


class RandomScorer:
    """Bounded uniform draws in place of a classifier. Seed it for reproducible runs."""

    def __init__(self, *, seed: int | None = None, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def _uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    async def score_text(self, features: TextFeatures) -> TextScore:
        sentiment = Sentiment.POSITIVE if self._rng.random() > 0.5 else Sentiment.NEGATIVE
        sentiment_score = self._uniform(0.5, 1.0)
        if features.has_suspicious_words:
            credibility = self._uniform(0.1, 0.5)
        else:
            credibility = self._uniform(0.5, 1.0)
        return TextScore(credibility=credibility, sentiment=sentiment, sentiment_score=sentiment_score)

    async def score_image(self, features: ImageFeatures) -> float:
        return self._uniform(0.2, 1.0)

    async def score_url(self, features: UrlFeatures) -> float:
        if features.is_reliable:
            return self._uniform(0.7, 1.0)
        if features.is_unreliable:
            return self._uniform(0.1, 0.4)
        return self._uniform(0.3, 0.9)

    async def detect_url_bias(self, features: UrlFeatures) -> bool:
        # Independent coin flip; not derived from any URL feature.
        return bool(self._rng.random() > 0.5)
