"""Celery tasks for running critiques outside the API process."""

import asyncio

from celery.utils.log import get_task_logger

from analyzers.figma_url import build_embed_url
from pipeline.exceptions import AnalysisError
from pipeline.notifications import ANALYSIS_COMPLETE
from pipeline.session import run_analysis
from worker.celery_app import celery_app

# Logger for tasks
logger = get_task_logger(__name__)


@celery_app.task(name="worker.tasks.run_critique")
def run_critique(url: str) -> dict:
    """
    Validate a Figma URL and generate its critique.

    Rejections and generator failures are returned as data rather than
    raised, so the job result always carries a notification.
    """
    logger.info(f"Running critique for {url!r}")

    try:
        report = asyncio.run(run_analysis(url))
    except AnalysisError as e:
        logger.warning(f"Critique for {url!r} failed: {e.notification.tag.value}")
        return {
            "status": "rejected" if e.status_code == 400 else "failed",
            "notification": e.notification.to_dict(),
            "error": e.detail,
        }

    logger.info(f"Critique for {url!r} completed")

    return {
        "status": "completed",
        "notification": ANALYSIS_COMPLETE.to_dict(),
        "report": report.to_dict(),
        "embed_url": build_embed_url(url),
    }
