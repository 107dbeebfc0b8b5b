"""Service layer package."""

from .analysis_controller import (
    EmptyTextError,
    InvalidTextError,
    RequestController,
    SessionControllers,
    session_controllers,
)

__all__ = [
    "EmptyTextError",
    "InvalidTextError",
    "RequestController",
    "SessionControllers",
    "session_controllers",
]
