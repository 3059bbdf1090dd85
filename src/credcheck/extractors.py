"""
Feature extractors: pure functions turning raw input into the signals the
scorers consume.
"""

from __future__ import annotations

import ipaddress
import os
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from .models import ImagePayload
from .reference import SUPPORTED_IMAGE_FORMATS, SUSPICIOUS_KEYWORDS, DomainTables

MAX_KEY_TERMS = 5
MIN_KEY_TERM_LENGTH = 5

_TOKEN_SPLIT = re.compile(r"\W+", re.ASCII)
_HOST_LABEL = re.compile(r"^[a-z0-9_](?:[a-z0-9_-]{0,61}[a-z0-9_])?$")


class InvalidInputError(ValueError):
    """Raised when raw input cannot be turned into features."""


class InvalidUrlError(InvalidInputError):
    """Input to the URL pipeline is not an absolute URL with a hostname."""


class InvalidImageError(InvalidInputError):
    """Image payload is empty or declares an unsupported format."""


@dataclass(frozen=True)
class TextFeatures:
    key_terms: tuple[str, ...]
    has_suspicious_words: bool


@dataclass(frozen=True)
class UrlFeatures:
    hostname: str
    is_reliable: bool
    is_unreliable: bool


@dataclass(frozen=True)
class ImageFeatures:
    size: int
    image_format: str | None


def extract_key_terms(text: str, limit: int = MAX_KEY_TERMS) -> tuple[str, ...]:
    tokens = _TOKEN_SPLIT.split(text.lower())
    return tuple(token for token in tokens if len(token) >= MIN_KEY_TERM_LENGTH)[:limit]


def has_suspicious_words(text: str) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in SUSPICIOUS_KEYWORDS)


def extract_text_features(text: str) -> TextFeatures:
    return TextFeatures(
        key_terms=extract_key_terms(text),
        has_suspicious_words=has_suspicious_words(text),
    )


def _is_valid_host(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass
    try:
        ascii_host = hostname.encode("idna").decode("ascii").lower()
    except UnicodeError:
        return False
    labels = ascii_host.rstrip(".").split(".")
    return all(_HOST_LABEL.match(label) for label in labels)


def parse_hostname(url: str) -> str:
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
        parsed.port  # raises ValueError for a malformed or out-of-range port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {url!r}") from exc
    if not parsed.scheme or not hostname or not _is_valid_host(hostname):
        raise InvalidUrlError(f"Invalid URL: {url!r}")
    return hostname.lower()


def extract_url_features(url: str, tables: DomainTables) -> UrlFeatures:
    hostname = parse_hostname(url)
    return UrlFeatures(
        hostname=hostname,
        is_reliable=tables.is_reliable(hostname),
        is_unreliable=tables.is_unreliable(hostname),
    )


def detect_image_format(payload: ImagePayload) -> str | None:
    """Format declared by content type or filename; the bytes are not inspected."""
    content_type = (payload.content_type or "").split(";")[0].strip().lower()
    extension = os.path.splitext(payload.filename or "")[1].lower()
    for name, (mime_types, extensions) in SUPPORTED_IMAGE_FORMATS.items():
        if content_type in mime_types or extension in extensions:
            return name
    return None


def extract_image_features(payload: ImagePayload | None) -> ImageFeatures:
    if payload is None or not payload.data:
        raise InvalidImageError("Image payload is empty")
    image_format = detect_image_format(payload)
    declared = payload.content_type or payload.filename
    if image_format is None and declared:
        raise InvalidImageError(f"Unsupported image format: {declared}")
    return ImageFeatures(size=payload.size, image_format=image_format)
