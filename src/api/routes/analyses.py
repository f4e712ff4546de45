"""One-shot analysis endpoint."""

from fastapi import APIRouter

from analyzers.figma_url import build_embed_url
from api.errors import to_http_exception
from api.schemas import AnalysisCreateRequest, AnalysisResponse
from pipeline.exceptions import AnalysisError
from pipeline.notifications import ANALYSIS_COMPLETE
from pipeline.session import run_analysis

router = APIRouter(prefix="/analyses", tags=["Analyses"])


@router.post(
    "",
    response_model=AnalysisResponse,
    summary="Analyze a Figma URL",
    description="Validate the URL and return its critique once generation finishes.",
)
async def create_analysis(request: AnalysisCreateRequest) -> AnalysisResponse:
    """Run the pipeline for a single URL without keeping any session state."""
    try:
        report = await run_analysis(request.url)
    except AnalysisError as e:
        raise to_http_exception(e)

    return AnalysisResponse.model_validate(
        {
            "notification": ANALYSIS_COMPLETE.to_dict(),
            "report": report.to_dict(),
            "embed_url": build_embed_url(request.url),
        }
    )
