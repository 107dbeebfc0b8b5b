"""Service layer driving the lifecycle of text analysis submissions."""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Callable

from pydantic import ValidationError

from ..clients import AnalysisAPIError, AnalysisClient, analysis_client
from ..config import settings
from ..models import (
    AnalysisRequest,
    ErrorInfo,
    ErrorKind,
    FailedState,
    IdleState,
    LifecycleState,
    LoadingState,
    SucceededState,
)
from ..projection import ProjectionError, ResultProjector, result_projector

logger = logging.getLogger(__name__)

StateObserver = Callable[[LifecycleState], None]


class InvalidTextError(ValueError):
    """Input cannot be turned into an AnalysisRequest."""


class EmptyTextError(InvalidTextError):
    """Input has no non-whitespace content."""


class RequestController:
    """
    Owns the lifecycle state of analysis submissions.

    State machine:
    - Idle -> Loading on submit
    - Loading -> Succeeded | Failed when the service call completes
    - Succeeded | Failed | Loading -> Loading on a new submit

    Every submission is numbered. When submissions overlap, only the result of
    the most recently issued one is applied; older results are discarded.
    """

    def __init__(
        self,
        client: AnalysisClient,
        projector: ResultProjector | None = None,
    ):
        """
        Initialize the controller.

        Args:
            client: Client for the analysis service
            projector: Projector for successful responses
        """
        self.client = client
        self.projector = projector or ResultProjector()
        self._state: LifecycleState = IdleState()
        self._sequence = 0
        self._observers: list[StateObserver] = []

    @property
    def state(self) -> LifecycleState:
        """Current lifecycle state."""
        return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """
        Register an observer called synchronously on every transition.

        Returns:
            Callable that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _transition(self, state: LifecycleState) -> None:
        logger.debug(f"Lifecycle transition: {self._state.status} -> {state.status}")
        self._state = state
        for observer in list(self._observers):
            observer(state)

    @staticmethod
    def validate(raw_text: str) -> AnalysisRequest:
        """
        Validate user input.

        Args:
            raw_text: Text as entered by the user

        Returns:
            AnalysisRequest holding the trimmed text

        Raises:
            EmptyTextError: If the text is empty or whitespace only
            InvalidTextError: If the text is not valid Unicode, e.g. a lone surrogate
        """
        text = raw_text.strip()
        if not text:
            raise EmptyTextError("Text must contain non-whitespace characters")
        try:
            return AnalysisRequest(text=text)
        except ValidationError as e:
            raise InvalidTextError(f"Text cannot be analyzed: {e.errors()[0]['msg']}") from e

    async def submit(self, request: AnalysisRequest) -> LifecycleState:
        """
        Submit a validated request and drive the lifecycle to a terminal state.

        The controller enters Loading before any I/O. Exactly one call is made
        to the analysis service and failures are not retried.

        Args:
            request: Request returned by validate

        Returns:
            The controller state once this submission has completed. If a newer
            submission was issued meanwhile, this submission's result is
            discarded and the state reflects the newer one.
        """
        self._sequence += 1
        request_id = self._sequence
        logger.info(f"Submitting analysis request {request_id} ({len(request.text)} chars)")
        self._transition(LoadingState(request_id=request_id, request=request))

        try:
            response = await self.client.analyze_text(request.text)
            view = self.projector.project(response)
        except asyncio.CancelledError:
            if request_id == self._sequence:
                logger.warning(f"Analysis request {request_id} was cancelled")
                self._transition(
                    FailedState(
                        request_id=request_id,
                        error=ErrorInfo(
                            kind=ErrorKind.CANCELLED, message="Request was cancelled"
                        ),
                    )
                )
            raise
        except AnalysisAPIError as e:
            logger.error(f"Analysis request {request_id} failed: {str(e)}")
            outcome = FailedState(request_id=request_id, error=e.to_error_info())
        except ProjectionError as e:
            logger.warning(f"Analysis request {request_id} could not be projected: {str(e)}")
            outcome = FailedState(request_id=request_id, error=e.to_error_info())
        else:
            outcome = SucceededState(request_id=request_id, response=response, view=view)

        if request_id != self._sequence:
            logger.info(
                f"Discarding result of analysis request {request_id}, superseded by {self._sequence}"
            )
            return self._state

        if isinstance(outcome, SucceededState):
            logger.info(
                f"Analysis request {request_id} succeeded: {outcome.view.sentiment_label} ({outcome.view.score_text})"
            )
        self._transition(outcome)
        return outcome

    def start(self, request: AnalysisRequest) -> "asyncio.Task[LifecycleState]":
        """
        Schedule a submission as a task on the running event loop.

        Loading is entered when the task first runs. Cancelling the task moves
        a still-current submission to Failed with a cancelled error.
        """
        return asyncio.create_task(self.submit(request))

    async def analyze(self, raw_text: str) -> LifecycleState:
        """
        Validate user input and submit it.

        Raises:
            InvalidTextError: If the text is empty or cannot be analyzed
        """
        return await self.submit(self.validate(raw_text))




class SessionControllers:
    """
    One RequestController per user session.

    Sessions are kept in least-recently-used order; once max_sessions is
    exceeded the oldest session and its state are dropped.
    """

    def __init__(
        self,
        client: AnalysisClient,
        projector: ResultProjector,
        max_sessions: int = 1000,
    ):
        self.client = client
        self.projector = projector
        self.max_sessions = max_sessions
        self._controllers: OrderedDict[str, RequestController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, session_id: str) -> RequestController:
        """Return the controller of a session, creating it on first use."""
        controller = self._controllers.get(session_id)
        if controller is not None:
            self._controllers.move_to_end(session_id)
            return controller

        controller = RequestController(self.client, self.projector)
        self._controllers[session_id] = controller
        logger.debug(f"Created controller for new session ({len(self._controllers)} active)")

        while len(self._controllers) > self.max_sessions:
            self._controllers.popitem(last=False)
            logger.debug("Evicted least recently used session")

        return controller


# Global session registry
session_controllers = SessionControllers(
    analysis_client, result_projector, settings.max_sessions
)
