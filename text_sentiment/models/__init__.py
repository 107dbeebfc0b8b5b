"""Data models package."""

from .analysis import (
    AnalysisDetails,
    AnalysisRequest,
    AnalysisResponse,
    DetailedBar,
    DistributionSlice,
    ProjectedView,
    VaderScores,
)
from .state import (
    ErrorInfo,
    ErrorKind,
    FailedState,
    IdleState,
    LifecycleState,
    LoadingState,
    SucceededState,
)

__all__ = [
    "AnalysisDetails",
    "AnalysisRequest",
    "AnalysisResponse",
    "DetailedBar",
    "DistributionSlice",
    "ErrorInfo",
    "ErrorKind",
    "FailedState",
    "IdleState",
    "LifecycleState",
    "LoadingState",
    "ProjectedView",
    "SucceededState",
    "VaderScores",
]
