"""
Canned explanations selected by score band.

Each table is an ordered list of ``(exclusive lower bound, template)`` pairs
evaluated top-down; the first bound the score exceeds wins. The final entry
uses ``None`` and catches everything at or below 0.4.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import AnalysisKind, Sentiment

Band = tuple[float | None, str]

TEXT_BANDS: list[Band] = [
    (
        0.8,
        "High credibility content detected. The text shows consistent factual patterns and neutral "
        "language typical of reliable sources. Sentiment analysis indicates {sentiment} tone with "
        "{sentiment_percent}% confidence.",
    ),
    (
        0.6,
        "Moderate credibility. Content requires fact-checking but shows some reliable indicators. "
        "Consider cross-referencing with multiple sources before sharing.",
    ),
    (
        0.4,
        "Low credibility detected. Content contains suspicious language patterns, emotional "
        "manipulation tactics, or unverified claims. Exercise caution and verify through official sources.",
    ),
    (
        None,
        "Potential misinformation identified. High risk of false or misleading information. Contains "
        "multiple red flags including sensational language, unsubstantiated claims, and manipulation patterns.",
    ),
]

IMAGE_BANDS: list[Band] = [
    (
        0.8,
        "Image analysis complete. No signs of manipulation detected. Metadata and pixel patterns are "
        "consistent with an unedited original ({score_percent}% confidence).",
    ),
    (
        0.6,
        "Image analysis complete. No strong signs of manipulation detected, but minor metadata "
        "inconsistencies warrant a reverse image search before sharing.",
    ),
    (
        0.4,
        "Image analysis complete. Potential digital manipulation found in image metadata and pixel "
        "analysis. Verify the original source of this image.",
    ),
    (
        None,
        "Image analysis complete. Strong indicators of digital manipulation or synthetic generation "
        "found in image metadata and pixel analysis. Treat this image as unreliable.",
    ),
]

URL_BANDS: list[Band] = [
    (
        0.8,
        'Domain "{hostname}" has high reliability ratings from fact-checking organizations. '
        "Consistently accurate reporting with transparent editorial standards.",
    ),
    (
        0.6,
        "Generally reliable source with occasional bias. Cross-reference important claims with additional sources.",
    ),
    (
        0.4,
        "Mixed reliability. Known for bias or occasional misinformation. Verify claims through multiple "
        "independent sources.",
    ),
    (
        None,
        "Low reliability domain. History of spreading misinformation or extreme bias. Avoid as a primary source.",
    ),
]

BANDS: dict[AnalysisKind, list[Band]] = {
    AnalysisKind.TEXT: TEXT_BANDS,
    AnalysisKind.IMAGE: IMAGE_BANDS,
    AnalysisKind.URL: URL_BANDS,
}


def select_template(score: float, bands: Sequence[Band]) -> str:
    for lower_bound, template in bands:
        if lower_bound is None or score > lower_bound:
            return template
    raise ValueError("band table has no catch-all entry")


def _percent(value: float) -> int:
    return round(value * 100)


def text_narrative(score: float, sentiment: Sentiment, sentiment_score: float) -> str:
    return select_template(score, TEXT_BANDS).format(
        sentiment=sentiment.value.lower(),
        sentiment_percent=_percent(sentiment_score),
    )


def image_narrative(score: float) -> str:
    return select_template(score, IMAGE_BANDS).format(score_percent=_percent(score))


def url_narrative(score: float, hostname: str) -> str:
    body = select_template(score, URL_BANDS).format(hostname=hostname)
    return f"Website analysis for {hostname}: {body}"
