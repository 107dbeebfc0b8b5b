"""Data models for analysis requests, service responses and projected views."""

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, field_validator


class AnalysisRequest(BaseModel):
    """Text accepted for submission to the analysis service."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Trimmed, non-empty text to analyze")

    @field_validator("text")
    @classmethod
    def _has_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must contain non-whitespace characters")
        return value


class VaderScores(BaseModel):
    """VADER polarity breakdown reported by the service."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    pos: StrictFloat = Field(..., description="Positive proportion, expected in [0, 1]")
    neu: StrictFloat = Field(..., description="Neutral proportion, expected in [0, 1]")
    neg: StrictFloat = Field(..., description="Negative proportion, expected in [0, 1]")
    compound: StrictFloat = Field(..., description="Aggregate polarity in [-1, 1]")


class AnalysisDetails(BaseModel):
    """Per-model scores behind the overall sentiment."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    vader_scores: VaderScores
    textblob_score: StrictFloat = Field(..., description="TextBlob polarity score")


class AnalysisResponse(BaseModel):
    """
    Response body of the analysis service.

    Scalar fields are strict: a missing field, a numeric string, a boolean or a
    non-finite number where a number is expected is a contract violation. The sentiment value is
    only checked for type here; the projector owns the closed enumeration.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    sentiment: StrictStr = Field(..., description="Sentiment class: positive, negative or neutral")
    score: StrictFloat = Field(..., description="Signed sentiment score")
    confidence: StrictFloat = Field(..., description="Confidence in [0, 1]")
    details: AnalysisDetails


class DistributionSlice(BaseModel):
    """One slice of the sentiment distribution chart."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float
    color_index: int
    color: str


class DetailedBar(BaseModel):
    """One bar of the detailed score breakdown."""

    model_config = ConfigDict(frozen=True)

    label: str
    fraction: float = Field(..., ge=0.0, le=1.0, description="Raw score clamped into [0, 1]")
    color_index: int
    color: str
    percent_text: str = Field(..., description="Fraction rendered as a percentage, e.g. '60.0%'")


class ProjectedView(BaseModel):
    """Render-ready view of an analysis response."""

    model_config = ConfigDict(frozen=True)

    sentiment_label: str = Field(..., description="Upper-case sentiment, e.g. 'POSITIVE'")
    score: float = Field(..., description="Unmodified numeric score")
    score_text: str = Field(..., description="Score formatted to two decimals")
    confidence: float
    distribution: list[DistributionSlice]
    detailed_bars: list[DetailedBar]
