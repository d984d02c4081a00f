"""Shared test fixtures: temporary database, fake GitHub API, API client."""

import io

import httpx
import pytest
from fastapi.testclient import TestClient
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from api.dependencies import get_github_client, get_store
from api.router import limiter
from main import app
from models.context import UserContext
from models.schemas import Job, Profile
from services.github_client import GitHubClient
from services.store import Store, utc_now


def github_transport(status_code: int = 200, payload=None) -> httpx.MockTransport:
    """Fake GitHub API answering every request with the same response."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload if payload is not None else {})

    return httpx.MockTransport(handler)


def make_pdf(*pages: list[str]) -> bytes:
    """Render each list of lines as one PDF page, one line per text row."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4
    for lines in pages:
        pdf.setFont("Helvetica", 11)
        y = height - 72
        for line in lines:
            pdf.drawString(72, y, line)
            y -= 18
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture
def store(tmp_path):
    db = Store(tmp_path / "test.db")
    db.init_db()
    return db


@pytest.fixture
def recruiter(store) -> UserContext:
    profile = store.upsert_profile(
        Profile(
            id="recruiter-1",
            email="rita@acme.test",
            full_name="Rita Recruiter",
            role="recruiter",
            company_name="Acme",
        )
    )
    return UserContext.from_profile(profile)


@pytest.fixture
def seeker(store) -> UserContext:
    profile = store.upsert_profile(
        Profile(
            id="seeker-1",
            email="sam@example.test",
            full_name="Sam Seeker",
            role="job_seeker",
        )
    )
    return UserContext.from_profile(profile)


@pytest.fixture
def python_job(store, recruiter) -> Job:
    job = Job(
        id="job-python",
        recruiter_id=recruiter.user_id,
        title="Backend Engineer",
        company="Acme",
        location="Remote",
        experience_required="3+ years",
        description="Build APIs",
        requirements=["Python"],
        created_at=utc_now(),
    )
    return store.insert_job(job)


@pytest.fixture
def offline_github() -> GitHubClient:
    """GitHub client whose every lookup fails with a connection error."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    return GitHubClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def client(store, offline_github):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_github_client] = lambda: offline_github
    limiter.enabled = False
    yield TestClient(app)
    limiter.enabled = True
    app.dependency_overrides.clear()
