import pytest

from credcheck.flags import derive_image_flags, derive_text_flags, derive_url_flags


def test_text_misinformation_boundary_is_strict():
    at_boundary = derive_text_flags(0.4, sentiment_score=0.7, has_suspicious_words=False)
    below = derive_text_flags(0.39999, sentiment_score=0.7, has_suspicious_words=False)
    assert at_boundary.potential_misinformation is False
    assert below.potential_misinformation is True


def test_text_fact_checking_boundary():
    assert derive_text_flags(0.6, sentiment_score=0.7, has_suspicious_words=False).needs_fact_checking is False
    assert derive_text_flags(0.59, sentiment_score=0.7, has_suspicious_words=False).needs_fact_checking is True


@pytest.mark.parametrize(
    "sentiment_score, expected",
    [(0.75, False), (0.81, True), (0.99, True), (0.5, False)],
)
def test_text_bias_from_sentiment_margin(sentiment_score, expected):
    flags = derive_text_flags(0.9, sentiment_score=sentiment_score, has_suspicious_words=False)
    assert flags.bias_detected is expected


def test_text_manipulation_follows_suspicious_words():
    assert derive_text_flags(0.9, sentiment_score=0.7, has_suspicious_words=True).manipulated_content is True
    assert derive_text_flags(0.1, sentiment_score=0.7, has_suspicious_words=False).manipulated_content is False


@pytest.mark.parametrize(
    "score, misinformation, fact_checking, manipulated",
    [
        (0.39, True, True, True),
        (0.4, True, True, False),
        (0.5, False, True, False),
        (0.69, False, True, False),
        (0.7, False, False, False),
    ],
)
def test_image_flags(score, misinformation, fact_checking, manipulated):
    flags = derive_image_flags(score)
    assert flags.potential_misinformation is misinformation
    assert flags.needs_fact_checking is fact_checking
    assert flags.manipulated_content is manipulated
    assert flags.bias_detected is False


@pytest.mark.parametrize(
    "score, misinformation, fact_checking, manipulated",
    [
        (0.29, True, True, True),
        (0.3, True, True, False),
        (0.4, False, True, False),
        (0.6, False, False, False),
    ],
)
def test_url_flags(score, misinformation, fact_checking, manipulated):
    flags = derive_url_flags(score, bias_detected=True)
    assert flags.potential_misinformation is misinformation
    assert flags.needs_fact_checking is fact_checking
    assert flags.manipulated_content is manipulated
    assert flags.bias_detected is True


def test_misinformation_flag_non_increasing_in_score():
    scores = [i / 100 for i in range(101)]
    for derive in (
        lambda s: derive_text_flags(s, sentiment_score=0.7, has_suspicious_words=False),
        derive_image_flags,
        lambda s: derive_url_flags(s, bias_detected=False),
    ):
        flags = [derive(s) for s in scores]
        for lower, higher in zip(flags, flags[1:]):
            if higher.potential_misinformation:
                assert lower.potential_misinformation
            if higher.needs_fact_checking:
                assert lower.needs_fact_checking
