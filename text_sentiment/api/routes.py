"""API routes serving text analysis results."""

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from ..config import settings
from ..models import FailedState, LifecycleState, SucceededState
from ..services import InvalidTextError, RequestController, session_controllers

logger = logging.getLogger(__name__)

SESSION_COOKIE = "analysis_session"

# Create API router
router = APIRouter(prefix=settings.api_prefix, tags=["analysis"])


class TextAnalysisInput(BaseModel):
    """Request body for text analysis."""

    text: str = Field(..., description="Free-form text to analyze")


def get_session_controller(request: Request, response: Response) -> RequestController:
    """Resolve the caller's controller, starting a new session when no cookie is sent."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        session_id = secrets.token_urlsafe(32)
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return session_controllers.get(session_id)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "text-sentiment"}


@router.get("/analysis/state", response_model=LifecycleState)
async def get_analysis_state(
    controller: RequestController = Depends(get_session_controller),
):
    """Return the lifecycle state of the caller's session."""
    return controller.state


@router.post("/analyze/text", response_model=SucceededState)
async def analyze_text(
    body: TextAnalysisInput,
    controller: RequestController = Depends(get_session_controller),
):
    """
    Analyze the sentiment of a text.

    Submits the text to the analysis service and returns the raw response
    together with its render-ready view:
    - Sentiment label (POSITIVE, NEGATIVE or NEUTRAL)
    - Score formatted to two decimals
    - Positive/neutral/negative distribution and score bars

    Empty or undecodable text is rejected with 400. A failed submission returns
    502 with the error kind, message and upstream status code.
    """
    try:
        request = controller.validate(body.text)
    except InvalidTextError as e:
        logger.info(f"Rejected analysis input: {str(e)}")
        raise HTTPException(status_code=400, detail=f"Invalid parameter: {str(e)}")

    state = await controller.submit(request)

    if isinstance(state, FailedState):
        logger.error(f"Analysis failed ({state.error.kind.value}): {state.error.message}")
        raise HTTPException(status_code=502, detail=state.error.model_dump(mode="json"))

    if not isinstance(state, SucceededState):
        # A newer submission from the same session is still in flight
        raise HTTPException(status_code=409, detail="Analysis superseded by a newer request")

    return state
