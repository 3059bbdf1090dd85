import pytest

from credcheck.models import Sentiment
from credcheck.narrative import (
    BANDS,
    IMAGE_BANDS,
    TEXT_BANDS,
    URL_BANDS,
    image_narrative,
    select_template,
    text_narrative,
    url_narrative,
)


@pytest.mark.parametrize(
    "score, index",
    [(1.0, 0), (0.81, 0), (0.8, 1), (0.61, 1), (0.6, 2), (0.41, 2), (0.4, 3), (0.0, 3)],
)
def test_band_selection_uses_strict_lower_bounds(score, index):
    for bands in BANDS.values():
        assert select_template(score, bands) == bands[index][1]


def test_every_band_table_ends_with_catch_all():
    for bands in (TEXT_BANDS, IMAGE_BANDS, URL_BANDS):
        assert len(bands) == 4
        assert bands[-1][0] is None


def test_table_without_catch_all_is_rejected():
    with pytest.raises(ValueError):
        select_template(0.1, [(0.5, "high")])


def test_text_high_band_mentions_sentiment():
    narrative = text_narrative(0.9, Sentiment.NEGATIVE, 0.876)
    assert narrative.startswith("High credibility content detected.")
    assert "negative tone with 88% confidence" in narrative


def test_text_low_band():
    assert text_narrative(0.2, Sentiment.POSITIVE, 0.6).startswith("Potential misinformation identified.")


def test_url_narrative_names_the_host():
    narrative = url_narrative(0.95, "www.reuters.com")
    assert narrative.startswith("Website analysis for www.reuters.com: ")
    assert 'Domain "www.reuters.com" has high reliability ratings' in narrative
    assert url_narrative(0.5, "example.net").endswith("Verify claims through multiple independent sources.")


def test_image_narrative_bands():
    assert "No signs of manipulation detected" in image_narrative(0.9)
    assert "Potential digital manipulation" in image_narrative(0.45)


def test_narrative_is_deterministic():
    assert text_narrative(0.7, Sentiment.POSITIVE, 0.9) == text_narrative(0.7, Sentiment.POSITIVE, 0.9)
