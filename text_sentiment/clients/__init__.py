"""HTTP clients package."""

from .analysis_client import (
    AnalysisAPIError,
    AnalysisClient,
    AnalysisHTTPError,
    AnalysisTransportError,
    MalformedResponseError,
    analysis_client,
)

__all__ = [
    "AnalysisAPIError",
    "AnalysisClient",
    "AnalysisHTTPError",
    "AnalysisTransportError",
    "MalformedResponseError",
    "analysis_client",
]
