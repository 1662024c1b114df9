"""Shared pytest fixtures for FinLink tests."""
import json
from contextlib import ExitStack
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from finlink.main import create_app
from finlink.services.risk_engine import RiskAssessmentClient


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


def gemini_reply(payload) -> dict:
    """Wrap a JSON-able object the way generateContent returns structured output."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """Each test gets its own database file."""
    return sqlite_url(tmp_path / "finlink_test.db")


@pytest.fixture
def client(db_url):
    """TestClient with no Gemini key configured, so analysis always falls back."""
    app = create_app(database_url=db_url, assessment_client=RiskAssessmentClient(api_key=""))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(db_url):
    """Build a TestClient whose Gemini calls are answered by `handler`."""
    with ExitStack() as stack:
        def _make(handler):
            assessor = RiskAssessmentClient(api_key="test-key", transport=httpx.MockTransport(handler))
            app = create_app(database_url=db_url, assessment_client=assessor)
            return stack.enter_context(TestClient(app))

        yield _make
