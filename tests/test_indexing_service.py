# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-16
# Description: test_indexing_service.py
# -----------------------------------------------------------------------------
import threading

import pytest

from factories import make_candidate, make_job
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import IndexingCancelledError
from services.IndexingService import IndexingService, build_candidate_text, build_job_text


class FailingEmbedder:
    dimensions = 16

    def __init__(self, message: str = "embedding service unavailable"):
        self.message = message
        self.calls = 0

    def generate(self, text):
        self.calls += 1
        raise RuntimeError(self.message)

    def test_connection(self):
        return False


class RecordingStore:
    """Wraps a real store and records delete calls."""

    def __init__(self, inner):
        self.inner = inner
        self.deleted = []

    def delete(self, doc_id, document_type):
        self.deleted.append((doc_id, document_type))
        self.inner.delete(doc_id, document_type)

    def __getattr__(self, name):
        return getattr(self.inner, name)


# ---------------------------------------------------------------------------
# request_indexing
# ---------------------------------------------------------------------------
def test_request_indexing_creates_pending_record(indexing, records):
    rec = indexing.request_indexing("job-1", DocumentType.JOB)

    assert rec.status == EmbeddingStatus.PENDING
    stored = records.get_by_document("job-1", DocumentType.JOB)
    assert stored is not None
    assert stored.id == rec.id


def test_request_indexing_twice_keeps_one_record(indexing, records):
    first = indexing.request_indexing("job-1", DocumentType.JOB)
    second = indexing.request_indexing("job-1", DocumentType.JOB)

    assert records.count() == 1
    assert second.id == first.id
    assert second.status == EmbeddingStatus.PENDING


def test_request_indexing_makes_no_external_calls(records, store):
    class Exploding:
        def __getattr__(self, name):
            raise AssertionError(f"unexpected external call: {name}")

    svc = IndexingService(records=records, documents=Exploding(), embedder=Exploding(), store=Exploding())
    rec = svc.request_indexing("user-1", DocumentType.CANDIDATE_PROFILE)
    assert rec.status == EmbeddingStatus.PENDING


def test_request_indexing_resets_indexed_record(indexing, documents, records):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)
    assert indexing.process_indexing(job.id, DocumentType.JOB)

    rec = indexing.request_indexing(job.id, DocumentType.JOB)

    assert rec.status == EmbeddingStatus.PENDING
    assert records.get_by_document(job.id, DocumentType.JOB).last_indexed_at is not None


def test_request_indexing_resets_exhausted_record(records, documents, store):
    svc = IndexingService(records=records, documents=documents, embedder=FailingEmbedder(), store=store)
    job = documents.seed_job(make_job())
    for _ in range(3):
        svc.request_indexing(job.id, DocumentType.JOB)
        svc.process_indexing(job.id, DocumentType.JOB)

    rec = records.get_by_document(job.id, DocumentType.JOB)
    assert not rec.can_retry

    rec = svc.request_indexing(job.id, DocumentType.JOB)
    assert rec.status == EmbeddingStatus.PENDING
    assert rec.retry_count == 3


# ---------------------------------------------------------------------------
# process_indexing
# ---------------------------------------------------------------------------
def test_process_without_record_returns_false(indexing, embedder):
    assert indexing.process_indexing("nope", DocumentType.JOB) is False
    assert embedder.calls == 0


def test_process_active_job_indexes(indexing, documents, records, store):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)

    assert indexing.process_indexing(job.id, DocumentType.JOB) is True

    rec = records.get_by_document(job.id, DocumentType.JOB)
    assert rec.status == EmbeddingStatus.INDEXED
    assert rec.last_indexed_at is not None
    assert rec.error_message is None
    assert store.get_job(job.id).title == job.title
    assert len(store.get_embedding(job.id, DocumentType.JOB)) == 16


def test_process_candidate_indexes(indexing, documents, records, store):
    candidate = documents.seed_candidate(make_candidate())
    indexing.request_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE)

    assert indexing.process_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE) is True
    assert records.get_by_document(candidate.user_id, DocumentType.CANDIDATE_PROFILE).is_ready
    assert store.get_candidate(candidate.user_id).full_name == "Alice Walker"


def test_inactive_job_is_deleted_and_not_embedded(records, documents, embedder, store):
    recording = RecordingStore(store)
    svc = IndexingService(records=records, documents=documents, embedder=embedder, store=recording)
    job = documents.seed_job(make_job(is_active=False))
    svc.request_indexing(job.id, DocumentType.JOB)

    assert svc.process_indexing(job.id, DocumentType.JOB) is True

    assert recording.deleted == [(job.id, DocumentType.JOB)]
    assert embedder.calls == 0
    rec = records.get_by_document(job.id, DocumentType.JOB)
    assert rec.status == EmbeddingStatus.SKIPPED
    assert rec.last_indexed_at is None
    assert store.get_job(job.id) is None


def test_job_closed_after_indexing_leaves_index(indexing, documents, store):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)
    indexing.process_indexing(job.id, DocumentType.JOB)
    assert store.get_job(job.id) is not None

    job.is_active = False
    indexing.request_indexing(job.id, DocumentType.JOB)
    assert indexing.process_indexing(job.id, DocumentType.JOB) is True

    assert store.get_job(job.id) is None
    assert store.search_jobs_for_candidate([1.0] * 16, top_k=10) == []


def test_embedding_failure_is_recorded_not_raised(records, documents, store):
    svc = IndexingService(records=records, documents=documents, embedder=FailingEmbedder(), store=store)
    job = documents.seed_job(make_job())
    svc.request_indexing(job.id, DocumentType.JOB)

    assert svc.process_indexing(job.id, DocumentType.JOB) is False

    rec = records.get_by_document(job.id, DocumentType.JOB)
    assert rec.status == EmbeddingStatus.FAILED
    assert rec.retry_count == 1
    assert "embedding service unavailable" in rec.error_message
    assert store.get_job(job.id) is None


def test_missing_document_is_recorded_as_failure(indexing, records):
    indexing.request_indexing("ghost", DocumentType.CANDIDATE_PROFILE)

    assert indexing.process_indexing("ghost", DocumentType.CANDIDATE_PROFILE) is False

    rec = records.get_by_document("ghost", DocumentType.CANDIDATE_PROFILE)
    assert rec.status == EmbeddingStatus.FAILED
    assert "not found" in rec.error_message


def test_index_write_failure_is_recorded(records, documents, embedder, store):
    class BrokenStore:
        def upsert_candidate(self, doc):
            raise ConnectionError("index unavailable")

    svc = IndexingService(records=records, documents=documents, embedder=embedder, store=BrokenStore())
    candidate = documents.seed_candidate(make_candidate())
    svc.request_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE)

    assert svc.process_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE) is False
    rec = records.get_by_document(candidate.user_id, DocumentType.CANDIDATE_PROFILE)
    assert rec.error_message == "index unavailable"


def test_process_requires_pending(indexing, documents, embedder):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)
    assert indexing.process_indexing(job.id, DocumentType.JOB) is True
    calls = embedder.calls

    # already Indexed: nothing to do until re-requested
    assert indexing.process_indexing(job.id, DocumentType.JOB) is False
    assert embedder.calls == calls


def test_reindex_requested_during_processing_is_kept(records, documents, embedder, store):
    job = documents.seed_job(make_job())

    class EditedDuringFetch:
        """Job is edited (and re-requested) while the first run is fetching it."""

        def __init__(self):
            self.fetches = 0

        def get_job(self, job_id):
            self.fetches += 1
            if self.fetches == 1:
                svc.request_indexing(job_id, DocumentType.JOB)
            return documents.get_job(job_id)

        def get_candidate(self, user_id):
            return documents.get_candidate(user_id)

    svc = IndexingService(records=records, documents=EditedDuringFetch(), embedder=embedder, store=store)
    svc.request_indexing(job.id, DocumentType.JOB)

    assert svc.process_indexing(job.id, DocumentType.JOB) is False
    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.PENDING

    assert svc.process_indexing(job.id, DocumentType.JOB) is True
    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.INDEXED
    assert embedder.calls == 2


def test_cancel_leaves_record_processing(indexing, documents, records, embedder):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(IndexingCancelledError):
        indexing.process_indexing(job.id, DocumentType.JOB, cancel=cancel)

    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.PROCESSING
    assert embedder.calls == 0


# ---------------------------------------------------------------------------
# text builders
# ---------------------------------------------------------------------------
def test_build_job_text_includes_salient_fields():
    text = build_job_text(make_job(title="CSM Architect", skills=["CSM", "Integration Hub"]))

    assert text.startswith("Job Title: CSM Architect\n")
    assert "Company: Acme Corp" in text
    assert "Type: FullTime, Mode: Remote, Level: Mid" in text
    assert "Location: London, UK" in text
    assert "Required Skills: CSM, Integration Hub" in text
    assert "ServiceNow Versions: Washington" in text


def test_build_job_text_skips_empty_optionals():
    text = build_job_text(make_job(company_name=None, requirements="", skills=[], service_now_versions=[]))

    assert "Company:" not in text
    assert "Requirements:" not in text
    assert "Required Skills:" not in text
    assert "ServiceNow Versions:" not in text


def test_build_candidate_text_includes_salient_fields():
    text = build_candidate_text(make_candidate())

    assert "Headline: ITSM Lead" in text
    assert "Current Role: Senior Developer" in text
    assert "Experience: 10 years, Level: Senior" in text
    assert "Availability: OpenToOpportunities" in text
    assert "Summary: Ten years building ServiceNow solutions." in text
    assert "Skills: itsm, javascript, CSM" in text
    assert "Certifications: CSA" in text
