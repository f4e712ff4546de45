"""Critic analysis pipeline package."""

from pipeline.exceptions import (
    AnalysisCancelledError,
    AnalysisError,
    AnalysisInProgressError,
    AnalysisTimeoutError,
    EmptyInputError,
    GenerationFailureError,
    InvalidUrlError,
    SessionLimitError,
    SessionNotFoundError,
)
from pipeline.notifications import Notification, NotificationTag
from pipeline.registry import SessionRegistry, get_registry
from pipeline.session import AnalysisSession, AnalysisStatus, prepare_request, run_analysis

__all__ = [
    "AnalysisCancelledError",
    "AnalysisError",
    "AnalysisInProgressError",
    "AnalysisTimeoutError",
    "EmptyInputError",
    "GenerationFailureError",
    "InvalidUrlError",
    "SessionLimitError",
    "SessionNotFoundError",
    "Notification",
    "NotificationTag",
    "SessionRegistry",
    "get_registry",
    "AnalysisSession",
    "AnalysisStatus",
    "prepare_request",
    "run_analysis",
]
