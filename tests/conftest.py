"""
Test configuration and fixtures for the Critic API.

The simulated analysis delay is switched off before the application
settings are loaded so tests run instantly.
"""

import os
from typing import Generator

os.environ["ANALYSIS_DELAY_SECONDS"] = "0"
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

import pytest
from fastapi.testclient import TestClient

from analyzers.base import AnalysisRequest
from pipeline.registry import SessionRegistry, get_registry


FIGMA_FILE_URL = "https://www.figma.com/file/ABC123/My-Design"


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from main import app

    return app


@pytest.fixture
def registry() -> SessionRegistry:
    """A fresh, empty session registry."""
    return SessionRegistry(max_sessions=10)


@pytest.fixture
def client(test_app, registry) -> Generator[TestClient, None, None]:
    """
    Test client with the session registry swapped for a fresh one,
    so sessions never leak between tests.
    """
    test_app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()


@pytest.fixture
def figma_request() -> AnalysisRequest:
    return AnalysisRequest(raw_url=FIGMA_FILE_URL, file_id="ABC123")
