"""
Analysis orchestrator.

``ContentAnalyzer`` dispatches one raw input to the matching pipeline, tracks
whether work is in flight and keeps the most recent successful result. State
moves through ``idle -> running -> succeeded | failed``; ``last_result`` is only
ever replaced by a complete result or cleared by ``reset_results``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from .config import get_settings
from .models import AnalysisKind, AnalysisResult, AnalysisState, ImagePayload
from .pipelines import ImagePipeline, TextPipeline, UrlPipeline
from .scoring import CredibilityScorer, RandomScorer

logger = logging.getLogger(__name__)


class AnalysisFailedError(RuntimeError):
    """Raised when a pipeline fails; wraps the underlying cause."""

    def __init__(self, kind: AnalysisKind, cause: BaseException) -> None:
        super().__init__(f"Failed to analyze {kind.value}")
        self.kind = kind
        self.cause = cause


class AnalysisInProgressError(RuntimeError):
    """Raised when single-flight is enabled and another analysis is running."""


def _default_scorer() -> CredibilityScorer:
    return RandomScorer(seed=get_settings().random_seed)


@dataclass
class ContentAnalyzer:
    scorer: CredibilityScorer = field(default_factory=_default_scorer)
    single_flight: bool | None = None
    text_pipeline: TextPipeline | None = None
    image_pipeline: ImagePipeline | None = None
    url_pipeline: UrlPipeline | None = None

    def __post_init__(self) -> None:
        if self.single_flight is None:
            self.single_flight = get_settings().single_flight
        self.text_pipeline = self.text_pipeline or TextPipeline(self.scorer)
        self.image_pipeline = self.image_pipeline or ImagePipeline(self.scorer)
        self.url_pipeline = self.url_pipeline or UrlPipeline(self.scorer)
        self._in_flight = 0
        self._state = AnalysisState.IDLE
        self._last_result: AnalysisResult | None = None
        self._last_error: AnalysisFailedError | None = None

    @property
    def is_analyzing(self) -> bool:
        return self._in_flight > 0

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def last_result(self) -> AnalysisResult | None:
        return self._last_result

    @property
    def last_error(self) -> AnalysisFailedError | None:
        return self._last_error

    async def analyze_text(self, text: str) -> AnalysisResult:
        return await self._run(AnalysisKind.TEXT, self.text_pipeline.run, text)

    async def analyze_image(self, payload: ImagePayload) -> AnalysisResult:
        return await self._run(AnalysisKind.IMAGE, self.image_pipeline.run, payload)

    async def analyze_url(self, url: str) -> AnalysisResult:
        return await self._run(AnalysisKind.URL, self.url_pipeline.run, url)

    def reset_results(self) -> None:
        self._last_result = None
        self._last_error = None
        if not self.is_analyzing:
            self._state = AnalysisState.IDLE

    async def _run(
        self,
        kind: AnalysisKind,
        pipeline: Callable[[Any], Awaitable[AnalysisResult]],
        raw: Any,
    ) -> AnalysisResult:
        if self.single_flight and self.is_analyzing:
            logger.warning("Rejected %s analysis: another analysis is in flight", kind.value)
            raise AnalysisInProgressError("An analysis is already running")

        self._in_flight += 1
        self._state = AnalysisState.RUNNING
        logger.debug("Starting %s analysis", kind.value)
        try:
            result = await pipeline(raw)
        except Exception as exc:
            logger.error("%s analysis error: %s", kind.value.capitalize(), exc, exc_info=True)
            error = AnalysisFailedError(kind, exc)
            self._last_error = error
            self._state = AnalysisState.FAILED
            raise error from exc
        else:
            self._last_result = result
            self._last_error = None
            self._state = AnalysisState.SUCCEEDED
            logger.info(
                "Completed %s analysis: score=%.3f flags=%s",
                kind.value,
                result.credibility_score,
                result.flags.model_dump(),
            )
            return result
        finally:
            self._in_flight -= 1
            if self.is_analyzing:
                self._state = AnalysisState.RUNNING
