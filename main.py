"""Entry point serving the text sentiment workflow over HTTP."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from text_sentiment.api import router
from text_sentiment.config import settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send all records to stdout with timestamp and logger name."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Text sentiment workflow ready, analysis service at {settings.analysis_api_url}")
    yield
    logger.info("Text sentiment workflow stopped")


def create_app() -> FastAPI:
    """Build the FastAPI app with CORS and the analysis routes."""
    application = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        lifespan=lifespan,
    )
    # Sessions ride on a cookie, so browsers must be allowed to send credentials
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(router)

    @application.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        # Echoed inputs may hold text that cannot be encoded as UTF-8
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    @application.get("/")
    async def root():
        """Service information and links."""
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "description": settings.api_description,
            "analysis_service": settings.analysis_api_url,
            "docs": "/docs",
            "health": f"{settings.api_prefix}/health",
        }

    return application


configure_logging(settings.log_level)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
