"""Lifecycle states of an analysis submission."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .analysis import AnalysisRequest, AnalysisResponse, ProjectedView


class ErrorKind(str, Enum):
    """Why a submission ended in the failed state."""

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN_SENTIMENT = "unknown_sentiment"
    OUT_OF_RANGE = "out_of_range"
    CANCELLED = "cancelled"


class ErrorInfo(BaseModel):
    """Diagnostic information carried by a failed state."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status_code: int | None = Field(None, description="HTTP status for http_status failures")


class IdleState(BaseModel):
    """No submission has been made yet."""

    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class LoadingState(BaseModel):
    """A submission is waiting on the analysis service."""

    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    request_id: int
    request: AnalysisRequest


class SucceededState(BaseModel):
    """The latest submission produced a projected view."""

    model_config = ConfigDict(frozen=True)

    status: Literal["succeeded"] = "succeeded"
    request_id: int
    response: AnalysisResponse
    view: ProjectedView


class FailedState(BaseModel):
    """The latest submission failed."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    request_id: int
    error: ErrorInfo


LifecycleState = Annotated[
    Union[IdleState, LoadingState, SucceededState, FailedState],
    Field(discriminator="status"),
]
