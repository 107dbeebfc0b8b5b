"""
Projection of analysis responses into render-ready views.

The projector is pure: it performs no I/O and the same response always yields
an equal ProjectedView. Scores are surfaced as reported by the service; the
VADER proportions are never renormalized, even when pos + neu + neg != 1.

Score formatting uses Python's fixed-point formatting, which rounds the exact
binary value of the float half-to-even (format(0.125, ".2f") == "0.12").
"""

from ..models import (
    AnalysisResponse,
    DetailedBar,
    DistributionSlice,
    ErrorInfo,
    ErrorKind,
    ProjectedView,
)

SENTIMENT_LABELS = ("positive", "negative", "neutral")

# Positive, neutral, negative
SENTIMENT_PALETTE = ("#4CAF50", "#9e9e9e", "#f44336")

# Slack allowed around [0, 1] before a score counts as a contract violation
RANGE_TOLERANCE = 1e-6


class ProjectionError(Exception):
    """Exception raised when a response cannot be projected."""

    kind: ErrorKind

    def to_error_info(self) -> ErrorInfo:
        """Convert the exception into the error carried by a failed state."""
        return ErrorInfo(kind=self.kind, message=str(self))


class UnknownSentimentError(ProjectionError):
    """The sentiment is outside positive, negative and neutral."""

    kind = ErrorKind.UNKNOWN_SENTIMENT


class OutOfRangeError(ProjectionError):
    """A VADER proportion lies outside [0, 1] beyond the tolerance."""

    kind = ErrorKind.OUT_OF_RANGE


class ResultProjector:
    """Derives display quantities from a validated AnalysisResponse."""

    def __init__(self, tolerance: float = RANGE_TOLERANCE):
        self.tolerance = tolerance

    def _sentiment_label(self, sentiment: str) -> str:
        if sentiment.lower() not in SENTIMENT_LABELS:
            raise UnknownSentimentError(f"Unknown sentiment: {sentiment!r}")
        return sentiment.upper()

    def _checked_fraction(self, name: str, value: float) -> float:
        """
        Clamp a proportion into [0, 1].

        Raises:
            OutOfRangeError: If the value lies outside [-tolerance, 1 + tolerance]
        """
        if not -self.tolerance <= value <= 1 + self.tolerance:
            raise OutOfRangeError(f"vader_scores.{name}={value} is outside [0, 1]")
        return min(max(value, 0.0), 1.0)

    def project(self, response: AnalysisResponse) -> ProjectedView:
        """
        Project an analysis response into a ProjectedView.

        Args:
            response: Contract-validated service response

        Returns:
            ProjectedView with label, formatted score, distribution and bars

        Raises:
            UnknownSentimentError: If the sentiment is not a known class
            OutOfRangeError: If a VADER proportion is outside [0, 1]
        """
        label = self._sentiment_label(response.sentiment)
        vader = response.details.vader_scores
        proportions = (
            ("Positive", vader.pos, self._checked_fraction("pos", vader.pos)),
            ("Neutral", vader.neu, self._checked_fraction("neu", vader.neu)),
            ("Negative", vader.neg, self._checked_fraction("neg", vader.neg)),
        )

        distribution = [
            DistributionSlice(
                name=name,
                value=value,
                color_index=index,
                color=SENTIMENT_PALETTE[index],
            )
            for index, (name, value, _) in enumerate(proportions)
        ]
        detailed_bars = [
            DetailedBar(
                label=f"{name} Score",
                fraction=fraction,
                color_index=index,
                color=SENTIMENT_PALETTE[index],
                percent_text=f"{fraction * 100:.1f}%",
            )
            for index, (name, _, fraction) in enumerate(proportions)
        ]

        return ProjectedView(
            sentiment_label=label,
            score=response.score,
            score_text=f"{response.score:.2f}",
            confidence=response.confidence,
            distribution=distribution,
            detailed_bars=detailed_bars,
        )


# Global projector instance
result_projector = ResultProjector()
