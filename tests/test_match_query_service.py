# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-16
# Description: test_match_query_service.py
# -----------------------------------------------------------------------------
import pytest

from factories import make_candidate, make_job
from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import AccessDeniedError, NotFoundError, ValidationError
from services.AccessGuard import can_view_job_matches
from services.MatchQueryService import matched_skills, score_percent


def _index(indexing, document_id, document_type):
    indexing.request_indexing(document_id, document_type)
    assert indexing.process_indexing(document_id, document_type)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "score, expected",
    [(0.0, 0), (0.874, 87), (0.875, 88), (1.0, 100), (1.2, 100), (-0.3, 0)],
)
def test_score_percent_is_clamped(score, expected):
    assert score_percent(score) == expected


def test_matched_skills_case_insensitive_exact():
    assert matched_skills(["ITSM", "JavaScript", "Flow"], ["itsm", "javascript ", "Flow Designer"]) == [
        "ITSM",
        "JavaScript",
    ]
    assert matched_skills(["ITSM"], []) == []


def test_access_rule():
    job = make_job(employer_id="emp-1")
    assert can_view_job_matches(job, "emp-1", False)
    assert not can_view_job_matches(job, "someone-else", False)
    assert can_view_job_matches(job, "someone-else", True)


# ---------------------------------------------------------------------------
# validation
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("page, page_size", [(0, 10), (-1, 10), (1, 0), (1, 51)])
def test_invalid_paging_rejected_for_candidate_query(matches, page, page_size):
    with pytest.raises(ValidationError):
        matches.get_job_matches_for_candidate("c1", page=page, page_size=page_size)


def test_invalid_paging_rejected_before_job_lookup(records, store):
    class Exploding:
        def __getattr__(self, name):
            raise AssertionError(f"unexpected external call: {name}")

    from services.MatchQueryService import MatchQueryService

    svc = MatchQueryService(records=records, documents=Exploding(), store=store)
    with pytest.raises(ValidationError):
        svc.get_candidate_matches_for_job("j1", "emp", False, page=1, page_size=500)


# ---------------------------------------------------------------------------
# readiness gating
# ---------------------------------------------------------------------------
def test_no_record_is_not_ready(matches):
    result = matches.get_job_matches_for_candidate("never-indexed", page=1, page_size=10)

    assert result.embedding_ready is False
    assert result.results == []
    assert result.total == 0


@pytest.mark.parametrize(
    "status",
    [EmbeddingStatus.PENDING, EmbeddingStatus.PROCESSING, EmbeddingStatus.FAILED, EmbeddingStatus.SKIPPED],
)
def test_non_indexed_record_is_not_ready(matches, records, status):
    rec = EmbeddingRecord.create("c1", DocumentType.CANDIDATE_PROFILE)
    rec.status = status
    records.add(rec)

    result = matches.get_job_matches_for_candidate("c1")
    assert result.embedding_ready is False
    assert result.results == []


# ---------------------------------------------------------------------------
# authorization
# ---------------------------------------------------------------------------
def test_candidates_for_missing_job_is_not_found(matches):
    with pytest.raises(NotFoundError):
        matches.get_candidate_matches_for_job("missing", "emp", True)


def test_non_owner_is_denied(matches, documents):
    job = documents.seed_job(make_job(employer_id="owner"))
    with pytest.raises(AccessDeniedError):
        matches.get_candidate_matches_for_job(job.id, "intruder", False)


def test_admin_bypasses_ownership(matches, documents):
    job = documents.seed_job(make_job(employer_id="owner"))
    result = matches.get_candidate_matches_for_job(job.id, "any-admin-id", True)
    assert result.embedding_ready is False


def test_owner_sees_ranked_candidates(matches, indexing, documents):
    job = documents.seed_job(make_job(employer_id="owner", skills=["ITSM", "JavaScript", "Flow Designer"]))
    alice = documents.seed_candidate(make_candidate(skills=["itsm", "javascript"]))
    bob = documents.seed_candidate(make_candidate(first_name="Bob", skills=["HRSD"]))
    away = documents.seed_candidate(make_candidate(first_name="Away", availability="NotAvailable"))
    for doc_id, doc_type in [
        (job.id, DocumentType.JOB),
        (alice.user_id, DocumentType.CANDIDATE_PROFILE),
        (bob.user_id, DocumentType.CANDIDATE_PROFILE),
        (away.user_id, DocumentType.CANDIDATE_PROFILE),
    ]:
        _index(indexing, doc_id, doc_type)

    result = matches.get_candidate_matches_for_job(job.id, "owner", False, page=1, page_size=10)

    assert result.embedding_ready is True
    ids = [m.user_id for m in result.results]
    assert set(ids) == {alice.user_id, bob.user_id}
    assert result.total == 2
    scores = [m.score for m in result.results]
    assert scores == sorted(scores, reverse=True)

    by_id = {m.user_id: m for m in result.results}
    assert by_id[alice.user_id].matched_skills == ["ITSM", "JavaScript"]
    assert by_id[bob.user_id].matched_skills == []
    for m in result.results:
        assert 0 <= m.score_percent <= 100


def test_unresolvable_candidates_are_skipped(matches, indexing, documents):
    job = documents.seed_job(make_job(employer_id="owner"))
    gone = documents.seed_candidate(make_candidate())
    _index(indexing, job.id, DocumentType.JOB)
    _index(indexing, gone.user_id, DocumentType.CANDIDATE_PROFILE)
    del documents.candidates[gone.user_id]

    result = matches.get_candidate_matches_for_job(job.id, "owner", False)
    assert result.embedding_ready is True
    assert result.results == []


# ---------------------------------------------------------------------------
# pagination
# ---------------------------------------------------------------------------
def test_pagination_over_ranked_list(matches, indexing, documents):
    candidate = documents.seed_candidate(make_candidate())
    _index(indexing, candidate.user_id, DocumentType.CANDIDATE_PROFILE)
    for i in range(5):
        job = documents.seed_job(make_job(title=f"Job {i}"))
        _index(indexing, job.id, DocumentType.JOB)

    full = matches.get_job_matches_for_candidate(candidate.user_id, page=1, page_size=50)
    page2 = matches.get_job_matches_for_candidate(candidate.user_id, page=2, page_size=2)
    page3 = matches.get_job_matches_for_candidate(candidate.user_id, page=3, page_size=2)
    page4 = matches.get_job_matches_for_candidate(candidate.user_id, page=4, page_size=2)

    assert full.total == page2.total == 5
    assert [m.job_id for m in page2.results] == [m.job_id for m in full.results[2:4]]
    assert [m.job_id for m in page3.results] == [full.results[4].job_id]
    assert page4.results == []
    assert page2.page == 2 and page2.page_size == 2


# ---------------------------------------------------------------------------
# end to end
# ---------------------------------------------------------------------------
def test_job_then_candidate_scenario(matches, indexing, documents, records, store):
    job = documents.seed_job(make_job(skills=["ITSM", "JavaScript"]))
    candidate = documents.seed_candidate(make_candidate(skills=["itsm"]))

    indexing.request_indexing(job.id, DocumentType.JOB)
    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.PENDING
    assert indexing.process_indexing(job.id, DocumentType.JOB) is True
    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.INDEXED
    assert store.get_job(job.id) is not None

    before = matches.get_job_matches_for_candidate(candidate.user_id)
    assert before.embedding_ready is False
    assert before.results == []

    indexing.request_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE)
    assert indexing.process_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE) is True

    after = matches.get_job_matches_for_candidate(candidate.user_id)
    assert after.embedding_ready is True
    hit = next(m for m in after.results if m.job_id == job.id)
    assert 0 <= hit.score_percent <= 100
    assert hit.title == job.title
    assert hit.matched_skills == ["ITSM"]


def test_missing_subject_vector_uses_synthetic_scores(matches, indexing, documents, store):
    job = documents.seed_job(make_job())
    candidate = documents.seed_candidate(make_candidate())
    _index(indexing, job.id, DocumentType.JOB)
    _index(indexing, candidate.user_id, DocumentType.CANDIDATE_PROFILE)
    store.delete(candidate.user_id, DocumentType.CANDIDATE_PROFILE)

    result = matches.get_job_matches_for_candidate(candidate.user_id)

    assert result.embedding_ready is True
    assert [(m.job_id, m.score_percent) for m in result.results] == [(job.id, 90)]
