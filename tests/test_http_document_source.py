# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-17
# Description: test_http_document_source.py
# -----------------------------------------------------------------------------
import httpx
import pytest

from config.Config import Config
from loader.DocumentSource import DocumentSource
from loader.HttpDocumentSource import HttpDocumentSource
from matching.MatchingErrors import TransientIndexingError

JOB_PAYLOAD = {
    "id": "11111111-1111-1111-1111-111111111111",
    "employerId": "emp-1",
    "title": "ServiceNow Developer",
    "description": "ITSM work",
    "skills": ["ITSM", "JavaScript"],
    "serviceNowVersions": ["Xanadu"],
    "isActive": True,
    "workMode": "Hybrid",
    "experienceLevel": "Senior",
    "jobType": "Contract",
    "salaryMin": 60000,
    "createdAt": "2026-01-02T10:00:00Z",
}

CANDIDATE_PAYLOAD = {
    "userId": "22222222-2222-2222-2222-222222222222",
    "firstName": "Sam",
    "lastName": "Lee",
    "headline": "CSM consultant",
    "skills": ["CSM"],
    "certifications": ["CIS-CSM"],
    "yearsOfExperience": 6,
    "availability": "OpenToOpportunities",
}


def _source(handler) -> HttpDocumentSource:
    transport = httpx.MockTransport(handler)
    return HttpDocumentSource(
        Config(),
        jobs_client=httpx.Client(base_url="http://jobs", transport=transport),
        profiles_client=httpx.Client(base_url="http://profiles", transport=transport),
    )


def test_get_job_parses_payload():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json=JOB_PAYLOAD)

    src = _source(handler)
    job = src.get_job(JOB_PAYLOAD["id"])

    assert isinstance(src, DocumentSource)
    assert seen == [f"/api/v1/jobs/{JOB_PAYLOAD['id']}/internal"]
    assert job.employer_id == "emp-1"
    assert job.skills == ["ITSM", "JavaScript"]
    assert job.is_active is True
    assert job.salary_min == 60000.0
    assert job.created_at.tzinfo is not None


def test_get_candidate_parses_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.startswith("/api/v1/profiles/candidates/")
        return httpx.Response(200, json=CANDIDATE_PAYLOAD)

    candidate = _source(handler).get_candidate(CANDIDATE_PAYLOAD["userId"])

    assert candidate.full_name == "Sam Lee"
    assert candidate.years_of_experience == 6
    assert candidate.certifications == ["CIS-CSM"]


def test_404_returns_none():
    src = _source(lambda request: httpx.Response(404))
    assert src.get_job("missing") is None
    assert src.get_candidate("missing") is None


def test_server_error_raises_transient():
    src = _source(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(TransientIndexingError):
        src.get_job("any")


def test_network_error_raises_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransientIndexingError):
        _source(handler).get_candidate("any")


def test_missing_urls_fail_fast():
    with pytest.raises(ValueError):
        HttpDocumentSource(Config())
