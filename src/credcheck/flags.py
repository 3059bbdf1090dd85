from __future__ import annotations

from dataclasses import dataclass

from .models import AnalysisFlags, AnalysisKind

BIAS_SENTIMENT_MARGIN = 0.3


@dataclass(frozen=True)
class FlagThresholds:
    misinformation: float
    fact_checking: float
    manipulation: float | None = None


THRESHOLDS: dict[AnalysisKind, FlagThresholds] = {
    AnalysisKind.TEXT: FlagThresholds(misinformation=0.4, fact_checking=0.6),
    AnalysisKind.IMAGE: FlagThresholds(misinformation=0.5, fact_checking=0.7, manipulation=0.4),
    AnalysisKind.URL: FlagThresholds(misinformation=0.4, fact_checking=0.6, manipulation=0.3),
}


def _below(score: float, threshold: float | None) -> bool:
    return threshold is not None and score < threshold


def derive_text_flags(score: float, *, sentiment_score: float, has_suspicious_words: bool) -> AnalysisFlags:
    thresholds = THRESHOLDS[AnalysisKind.TEXT]
    return AnalysisFlags(
        potential_misinformation=_below(score, thresholds.misinformation),
        needs_fact_checking=_below(score, thresholds.fact_checking),
        bias_detected=abs(sentiment_score - 0.5) > BIAS_SENTIMENT_MARGIN,
        manipulated_content=has_suspicious_words,
    )


def derive_image_flags(score: float) -> AnalysisFlags:
    thresholds = THRESHOLDS[AnalysisKind.IMAGE]
    return AnalysisFlags(
        potential_misinformation=_below(score, thresholds.misinformation),
        needs_fact_checking=_below(score, thresholds.fact_checking),
        bias_detected=False,
        manipulated_content=_below(score, thresholds.manipulation),
    )


def derive_url_flags(score: float, *, bias_detected: bool) -> AnalysisFlags:
    thresholds = THRESHOLDS[AnalysisKind.URL]
    return AnalysisFlags(
        potential_misinformation=_below(score, thresholds.misinformation),
        needs_fact_checking=_below(score, thresholds.fact_checking),
        bias_detected=bias_detected,
        manipulated_content=_below(score, thresholds.manipulation),
    )
