# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: test_embedding_worker.py
# -----------------------------------------------------------------------------
import threading
import time

import pytest

from factories import make_candidate, make_job
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from services.EmbeddingWorker import EmbeddingWorker


@pytest.fixture
def worker(indexing, records):
    w = EmbeddingWorker(indexing=indexing, records=records, shards=2, interval_seconds=60.0, batch_size=10)
    yield w
    w.stop()


def test_submit_processes_document(worker, indexing, documents, records):
    job = documents.seed_job(make_job())
    indexing.request_indexing(job.id, DocumentType.JOB)

    worker.start()
    worker.submit(job.id, DocumentType.JOB)
    worker.wait_idle()

    assert records.get_by_document(job.id, DocumentType.JOB).status == EmbeddingStatus.INDEXED


def test_submit_same_document_twice_is_deduplicated(worker):
    # not started: items stay queued
    assert worker.submit("job-1", DocumentType.JOB) is True
    assert worker.submit("job-1", DocumentType.JOB) is False
    assert worker.submit("job-1", DocumentType.CANDIDATE_PROFILE) is True


def test_same_document_always_routes_to_same_shard(worker):
    item = ("job-1", DocumentType.JOB)
    assert len({worker._shard_for(item) for _ in range(10)}) == 1


def test_poller_sweeps_pending_records(indexing, records, documents):
    jobs = [documents.seed_job(make_job()) for _ in range(3)]
    candidate = documents.seed_candidate(make_candidate())
    for job in jobs:
        indexing.request_indexing(job.id, DocumentType.JOB)
    indexing.request_indexing(candidate.user_id, DocumentType.CANDIDATE_PROFILE)

    w = EmbeddingWorker(indexing=indexing, records=records, shards=3, interval_seconds=0.05, batch_size=10)
    w.start()
    try:
        deadline = time.monotonic() + 5.0
        while records.get_pending(10) and time.monotonic() < deadline:
            time.sleep(0.02)
        w.wait_idle()
    finally:
        w.stop()

    assert records.get_pending(10) == []
    for job in jobs:
        assert records.get_by_document(job.id, DocumentType.JOB).is_ready
    assert records.get_by_document(candidate.user_id, DocumentType.CANDIDATE_PROFILE).is_ready


def test_per_document_processing_is_serialized(records, documents, store):
    active = {"count": 0, "max": 0}
    lock = threading.Lock()

    class SlowIndexing:
        def process_indexing(self, document_id, document_type, cancel=None):
            with lock:
                active["count"] += 1
                active["max"] = max(active["max"], active["count"])
            time.sleep(0.02)
            with lock:
                active["count"] -= 1
            return True

    w = EmbeddingWorker(indexing=SlowIndexing(), records=records, shards=4, interval_seconds=60.0)
    w.start()
    try:
        for _ in range(5):
            w.submit("job-1", DocumentType.JOB)
            time.sleep(0.005)
        w.wait_idle()
    finally:
        w.stop()

    assert active["max"] == 1


def test_stop_is_idempotent(worker):
    worker.start()
    assert worker.running
    worker.stop()
    worker.stop()
    assert not worker.running
