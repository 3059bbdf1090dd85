import sys
from pathlib import Path
import os

import pytest


# Ensure project src is on path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

# Deterministic draws and no stray .env overrides during tests
os.environ.setdefault("CREDCHECK_RANDOM_SEED", "1234")
os.environ.setdefault("CREDCHECK_SINGLE_FLIGHT", "true")

from credcheck.extractors import ImageFeatures, TextFeatures, UrlFeatures  # noqa: E402
from credcheck.models import Sentiment  # noqa: E402
from credcheck.scoring import TextScore  # noqa: E402


class FixedScorer:
    """Scorer returning preset values so thresholds can be hit exactly."""

    def __init__(
        self,
        score: float = 0.5,
        *,
        sentiment: Sentiment = Sentiment.POSITIVE,
        sentiment_score: float = 0.7,
        bias: bool = False,
    ) -> None:
        self.score = score
        self.sentiment = sentiment
        self.sentiment_score = sentiment_score
        self.bias = bias
        self.seen: list = []

    async def score_text(self, features: TextFeatures) -> TextScore:
        self.seen.append(features)
        return TextScore(credibility=self.score, sentiment=self.sentiment, sentiment_score=self.sentiment_score)

    async def score_image(self, features: ImageFeatures) -> float:
        self.seen.append(features)
        return self.score

    async def score_url(self, features: UrlFeatures) -> float:
        self.seen.append(features)
        return self.score

    async def detect_url_bias(self, features: UrlFeatures) -> bool:
        return self.bias


@pytest.fixture
def fixed_scorer():
    return FixedScorer
