"""Background critique job endpoints."""

from celery.result import AsyncResult
from fastapi import APIRouter, status

from api.errors import to_http_exception
from api.schemas import AnalysisCreateRequest, JobCreatedResponse, JobResponse
from pipeline.exceptions import AnalysisError
from pipeline.session import prepare_request
from worker.celery_app import celery_app
from worker.tasks import run_critique

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post(
    "",
    response_model=JobCreatedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue a critique job",
    description="Validate the URL and queue its critique on the worker. Returns immediately with the job ID.",
)
async def create_job(request: AnalysisCreateRequest) -> JobCreatedResponse:
    """
    Queue a critique.

    The URL is validated here so rejected input never reaches the queue.
    Poll GET /jobs/{id} for the result.
    """
    try:
        prepare_request(request.url)
    except AnalysisError as e:
        raise to_http_exception(e)

    result = run_critique.delay(request.url)

    return JobCreatedResponse(
        id=result.id,
        url=request.url,
        status="queued",
    )


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    summary="Get job status",
    description="Get the state of a queued critique and its result once finished.",
)
async def get_job(job_id: str) -> JobResponse:
    result = AsyncResult(job_id, app=celery_app)

    return JobResponse(
        id=job_id,
        status=result.status.lower(),
        result=result.result if result.successful() else None,
    )
