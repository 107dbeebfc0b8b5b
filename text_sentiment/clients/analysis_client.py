"""HTTP client for interacting with the sentiment analysis service."""

import logging

import httpx
from pydantic import ValidationError

from ..config import settings
from ..models import AnalysisResponse, ErrorInfo, ErrorKind

logger = logging.getLogger(__name__)


class AnalysisAPIError(Exception):
    """Exception raised for analysis service errors."""

    kind: ErrorKind

    def to_error_info(self) -> ErrorInfo:
        """Convert the exception into the error carried by a failed state."""
        return ErrorInfo(kind=self.kind, message=str(self))


class AnalysisTransportError(AnalysisAPIError):
    """Connection-level failure: refused connection, timeout, DNS failure."""

    kind = ErrorKind.TRANSPORT


class AnalysisHTTPError(AnalysisAPIError):
    """The service answered with a non-success status code."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}")

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(kind=self.kind, message=str(self), status_code=self.status_code)


class MalformedResponseError(AnalysisAPIError):
    """The response body is not JSON or does not match the response contract."""

    kind = ErrorKind.MALFORMED_RESPONSE


class AnalysisClient:
    """Async HTTP client for the analysis service."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the analysis client.

        Args:
            base_url: Base URL of the analysis service
            timeout: Request timeout in seconds, None to wait indefinitely
            transport: Optional httpx transport, used to stub the service in tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post_json(self, endpoint: str, payload: dict) -> httpx.Response:
        """
        POST a JSON payload and return the successful response.

        Exactly one request is made; failures are not retried.

        Raises:
            AnalysisHTTPError: If the service returns a non-success status
            AnalysisTransportError: If the request could not be completed
        """
        url = f"{self.base_url}{endpoint}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response

        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error {e.response.status_code} for {url}: {e.response.text}"
            )
            raise AnalysisHTTPError(e.response.status_code, e.response.text)

        except httpx.RequestError as e:
            logger.error(f"Request error for {url}: {type(e).__name__}: {str(e)}")
            raise AnalysisTransportError(f"Request failed: {str(e) or type(e).__name__}")

    async def analyze_text(self, text: str) -> AnalysisResponse:
        """
        Submit text to the analysis service.

        Args:
            text: Trimmed text to analyze

        Returns:
            Validated AnalysisResponse

        Raises:
            AnalysisTransportError: If the service could not be reached
            AnalysisHTTPError: If the service returns a non-success status
            MalformedResponseError: If the body is not a valid AnalysisResponse
        """
        response = await self._post_json("/analyze/text", {"text": text})

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Response from analysis service is not JSON: {str(e)}")
            raise MalformedResponseError(f"Response body is not valid JSON: {str(e)}")

        try:
            result = AnalysisResponse.model_validate(data)
        except ValidationError as e:
            logger.warning(
                f"Response from analysis service violates the contract: {e.error_count()} error(s)"
            )
            raise MalformedResponseError(f"Response does not match contract: {str(e)}")

        logger.debug(f"Received analysis: {result.sentiment} ({result.score:.3f})")
        return result


# Global client instance
analysis_client = AnalysisClient(settings.analysis_api_url, settings.analysis_timeout)
