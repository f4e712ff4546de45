"""Session API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status

from analyzers.figma_url import build_embed_url
from api.errors import to_http_exception
from api.schemas import (
    AnalysisCreateRequest,
    AnalysisResponse,
    CancelResponse,
    SessionCreatedResponse,
    SessionResponse,
)
from pipeline.exceptions import AnalysisError, SessionLimitError, SessionNotFoundError
from pipeline.registry import SessionRegistry, get_registry
from pipeline.session import AnalysisSession

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def _get_session(session_id: uuid.UUID, registry: SessionRegistry) -> AnalysisSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )


@router.post(
    "",
    response_model=SessionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a session",
    description="Create a session that holds one analysis at a time and caches its report.",
)
async def create_session(
    registry: SessionRegistry = Depends(get_registry),
) -> SessionCreatedResponse:
    try:
        session = registry.create()
    except SessionLimitError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )

    return SessionCreatedResponse(id=session.id, status=session.status.value)


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    summary="Get session state",
    description="Get the session status, its cached report and the last notification.",
)
async def get_session(
    session_id: uuid.UUID,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionResponse:
    session = _get_session(session_id, registry)

    return SessionResponse.model_validate(
        {
            "id": session.id,
            "status": session.status.value,
            "created_at": session.created_at,
            "updated_at": session.updated_at,
            "report": session.report.to_dict() if session.report else None,
            "notification": session.notification.to_dict() if session.notification else None,
        }
    )


@router.post(
    "/{session_id}/analyses",
    response_model=AnalysisResponse,
    summary="Submit a URL",
    description="Analyze a Figma URL within the session. Fails with 409 while another analysis runs.",
)
async def submit_analysis(
    session_id: uuid.UUID,
    request: AnalysisCreateRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> AnalysisResponse:
    """
    Submit a URL to the session.

    Rejected URLs leave the cached report untouched; the error detail holds
    the notification to show the user.
    """
    session = _get_session(session_id, registry)

    try:
        report = await session.submit(request.url)
    except AnalysisError as e:
        raise to_http_exception(e)

    return AnalysisResponse.model_validate(
        {
            "notification": session.notification.to_dict(),
            "report": report.to_dict(),
            "embed_url": build_embed_url(request.url),
        }
    )


@router.delete(
    "/{session_id}/analyses",
    response_model=CancelResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Cancel the running analysis",
)
async def cancel_analysis(
    session_id: uuid.UUID,
    registry: SessionRegistry = Depends(get_registry),
) -> CancelResponse:
    session = _get_session(session_id, registry)

    if not session.cancel():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session {session_id} has no analysis running",
        )

    return CancelResponse(id=session.id)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a session",
)
async def delete_session(
    session_id: uuid.UUID,
    registry: SessionRegistry = Depends(get_registry),
) -> Response:
    _get_session(session_id, registry)
    registry.remove(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
