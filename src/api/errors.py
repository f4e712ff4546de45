"""Translation of pipeline errors into HTTP errors."""

from fastapi import HTTPException

from pipeline.exceptions import AnalysisError


def to_http_exception(error: AnalysisError) -> HTTPException:
    """Build an HTTPException whose detail carries the user-facing notification."""
    return HTTPException(
        status_code=error.status_code,
        detail={**error.notification.to_dict(), "error": error.detail},
    )
