from __future__ import annotations

import math
from dataclasses import dataclass, field

from .extractors import extract_image_features, extract_text_features, extract_url_features
from .flags import derive_image_flags, derive_text_flags, derive_url_flags
from .models import AnalysisDetails, AnalysisKind, AnalysisResult, ImagePayload
from .narrative import image_narrative, text_narrative, url_narrative
from .reference import IMAGE_KEY_TERMS, REFERENCE_SOURCES, URL_KEY_TERMS, DomainTables, load_domain_tables
from .scoring import CredibilityScorer


def _clamp(score: float) -> float:
    if math.isnan(score):
        raise ValueError("scorer returned NaN")
    return min(1.0, max(0.0, score))


@dataclass
class TextPipeline:
    scorer: CredibilityScorer
    kind: AnalysisKind = AnalysisKind.TEXT

    async def run(self, text: str) -> AnalysisResult:
        features = extract_text_features(text)
        scored = await self.scorer.score_text(features)
        score = _clamp(scored.credibility)
        sentiment_score = _clamp(scored.sentiment_score)
        return AnalysisResult(
            kind=self.kind,
            credibility_score=score,
            analysis=text_narrative(score, scored.sentiment, sentiment_score),
            sources=REFERENCE_SOURCES[self.kind],
            flags=derive_text_flags(
                score,
                sentiment_score=sentiment_score,
                has_suspicious_words=features.has_suspicious_words,
            ),
            details=AnalysisDetails(
                sentiment=scored.sentiment,
                confidence=sentiment_score,
                key_terms=features.key_terms,
            ),
        )


@dataclass
class ImagePipeline:
    scorer: CredibilityScorer
    kind: AnalysisKind = AnalysisKind.IMAGE

    async def run(self, payload: ImagePayload) -> AnalysisResult:
        features = extract_image_features(payload)
        score = _clamp(await self.scorer.score_image(features))
        return AnalysisResult(
            kind=self.kind,
            credibility_score=score,
            analysis=image_narrative(score),
            sources=REFERENCE_SOURCES[self.kind],
            flags=derive_image_flags(score),
            details=AnalysisDetails(confidence=score, key_terms=IMAGE_KEY_TERMS),
        )


@dataclass
class UrlPipeline:
    scorer: CredibilityScorer
    tables: DomainTables = field(default_factory=load_domain_tables)
    kind: AnalysisKind = AnalysisKind.URL

    async def run(self, url: str) -> AnalysisResult:
        features = extract_url_features(url, self.tables)
        score = _clamp(await self.scorer.score_url(features))
        bias_detected = await self.scorer.detect_url_bias(features)
        return AnalysisResult(
            kind=self.kind,
            credibility_score=score,
            analysis=url_narrative(score, features.hostname),
            sources=REFERENCE_SOURCES[self.kind],
            flags=derive_url_flags(score, bias_detected=bias_detected),
            details=AnalysisDetails(
                confidence=score,
                key_terms=(features.hostname, *URL_KEY_TERMS),
            ),
        )
