from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AnalysisKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    URL = "url"


class Sentiment(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class AnalysisState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AnalysisFlags(_FrozenModel):
    potential_misinformation: bool
    needs_fact_checking: bool
    bias_detected: bool
    manipulated_content: bool


class AnalysisDetails(_FrozenModel):
    sentiment: Sentiment | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    key_terms: tuple[str, ...] = ()


class AnalysisResult(_FrozenModel):
    kind: AnalysisKind
    credibility_score: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    analysis: str = Field(..., min_length=1)
    sources: tuple[str, ...] = Field(..., min_length=1)
    flags: AnalysisFlags
    details: AnalysisDetails
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("sources")
    @classmethod
    def _unique_sources(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("sources must not contain duplicates")
        return value


class ImagePayload(BaseModel):
    """Uploaded image. Only its presence and declared format are ever looked at."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)
