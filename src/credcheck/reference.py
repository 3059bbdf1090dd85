from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import tldextract

from .config import get_settings
from .models import AnalysisKind

SUSPICIOUS_KEYWORDS: tuple[str, ...] = ("breaking", "urgent", "shocking", "secret", "exposed")

RELIABLE_DOMAINS: tuple[str, ...] = ("reuters.com", "ap.org", "bbc.com", "npr.org")
UNRELIABLE_DOMAINS: tuple[str, ...] = ("fakenews.com", "clickbait.org")

REFERENCE_SOURCES: dict[AnalysisKind, tuple[str, ...]] = {
    AnalysisKind.TEXT: (
        "Reuters Fact Check Database",
        "AP News Verification",
        "Snopes.com",
        "PolitiFact",
    ),
    AnalysisKind.IMAGE: (
        "Forensic Image Analysis DB",
        "Deepfake Detection Network",
        "Metadata Verification",
    ),
    AnalysisKind.URL: (
        "MediaBias/FactCheck",
        "AllSides Media Bias Chart",
        "NewsGuard Rating",
        "Wikipedia Reliability",
    ),
}

IMAGE_KEY_TERMS: tuple[str, ...] = ("digital_signature", "metadata", "pixel_analysis")
URL_KEY_TERMS: tuple[str, ...] = ("source_reliability", "fact_checking")

# format name -> (mime types, file extensions)
SUPPORTED_IMAGE_FORMATS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "jpeg": (("image/jpeg", "image/jpg", "image/pjpeg"), (".jpg", ".jpeg")),
    "png": (("image/png",), (".png",)),
    "webp": (("image/webp",), (".webp",)),
}

# Offline extractor: the bundled public suffix snapshot is enough here.
_extract = tldextract.TLDExtract(suffix_list_urls=())


def normalize_domain(source: str) -> str:
    extracted = _extract(source.strip())
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return source.strip().lower()


@dataclass(frozen=True)
class DomainTables:
    reliable: tuple[str, ...]
    unreliable: tuple[str, ...]

    def is_reliable(self, hostname: str) -> bool:
        return any(domain in hostname for domain in self.reliable)

    def is_unreliable(self, hostname: str) -> bool:
        return any(domain in hostname for domain in self.unreliable)


def _merge(base: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    merged = list(base)
    for entry in extra:
        if not entry or not entry.strip():
            continue
        normalized = normalize_domain(entry)
        if normalized not in merged:
            merged.append(normalized)
    return tuple(merged)


def load_domain_tables() -> DomainTables:
    """Built-in domain tables extended with the configured trusted/suspicious domains."""
    settings = get_settings()
    return DomainTables(
        reliable=_merge(RELIABLE_DOMAINS, settings.trusted_domains),
        unreliable=_merge(UNRELIABLE_DOMAINS, settings.suspicious_domains),
    )
