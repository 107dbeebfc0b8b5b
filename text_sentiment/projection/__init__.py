"""Result projection package."""

from .projector import (
    SENTIMENT_PALETTE,
    OutOfRangeError,
    ProjectionError,
    ResultProjector,
    UnknownSentimentError,
    result_projector,
)

__all__ = [
    "SENTIMENT_PALETTE",
    "OutOfRangeError",
    "ProjectionError",
    "ResultProjector",
    "UnknownSentimentError",
    "result_projector",
]
