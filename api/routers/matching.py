# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-14
# Description: matching router
# -----------------------------------------------------------------------------
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

import settings
from api.dependencies import (
    Requester,
    get_indexing_service,
    get_match_query_service,
    get_requester,
    get_worker,
)
from api.schemas.matching import (
    CandidateMatchResponse,
    CandidateMatchResultsResponse,
    EmbeddingStatusResponse,
    JobMatchResponse,
    JobMatchResultsResponse,
)
from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType
from matching.MatchingErrors import AccessDeniedError, NotFoundError, ValidationError
from services.EmbeddingWorker import EmbeddingWorker
from services.IndexingService import IndexingService
from services.MatchQueryService import MatchQueryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching", tags=["matching"])


def _status_response(record: EmbeddingRecord) -> EmbeddingStatusResponse:
    return EmbeddingStatusResponse(
        document_id=record.document_id,
        document_type=record.document_type.value,
        status=record.status.value,
        last_indexed_at=record.last_indexed_at,
        retry_count=record.retry_count,
        error_message=record.error_message,
    )


def _request_indexing(
    document_id: str,
    document_type: DocumentType,
    svc: IndexingService,
    worker: EmbeddingWorker,
) -> EmbeddingStatusResponse:
    record = svc.request_indexing(document_id, document_type)
    if worker.running:
        worker.submit(record.document_id, record.document_type)
    return _status_response(record)


@router.post("/index/my-profile", status_code=202, response_model=EmbeddingStatusResponse)
def index_my_profile(
    requester: Requester = Depends(get_requester),
    svc: IndexingService = Depends(get_indexing_service),
    worker: EmbeddingWorker = Depends(get_worker),
) -> EmbeddingStatusResponse:
    logger.info("POST /matching/index/my-profile (start) user='%s'", requester.user_id)
    try:
        resp = _request_indexing(requester.user_id, DocumentType.CANDIDATE_PROFILE, svc, worker)
        logger.info("POST /matching/index/my-profile (done) user='%s'", requester.user_id)
        return resp
    except Exception as e:
        logger.exception("POST /matching/index/my-profile -> 500 user='%s': %s", requester.user_id, e)
        raise HTTPException(status_code=500, detail=f"index_my_profile failed: {e}")


@router.post("/index/jobs/{job_id}", status_code=202, response_model=EmbeddingStatusResponse)
def index_job(
    job_id: str,
    requester: Requester = Depends(get_requester),
    svc: IndexingService = Depends(get_indexing_service),
    worker: EmbeddingWorker = Depends(get_worker),
) -> EmbeddingStatusResponse:
    job_id = (job_id or "").strip()
    logger.info("POST /matching/index/jobs/{job_id} (start) job_id='%s' user='%s'", job_id, requester.user_id)
    try:
        resp = _request_indexing(job_id, DocumentType.JOB, svc, worker)
        logger.info("POST /matching/index/jobs/{job_id} (done) job_id='%s'", job_id)
        return resp
    except Exception as e:
        logger.exception("POST /matching/index/jobs/{job_id} -> 500 job_id='%s': %s", job_id, e)
        raise HTTPException(status_code=500, detail=f"index_job failed: {e}")


@router.get("/index/{document_type}/{document_id}", response_model=EmbeddingStatusResponse)
def get_indexing_status(
    document_type: str,
    document_id: str,
    requester: Requester = Depends(get_requester),
    svc: IndexingService = Depends(get_indexing_service),
) -> EmbeddingStatusResponse:
    logger.info(
        "GET /matching/index/{document_type}/{document_id} (start) type='%s' id='%s'",
        document_type,
        document_id,
    )
    try:
        doc_type = DocumentType(document_type)
    except ValueError:
        logger.warning("GET /matching/index -> 400 (unknown document type '%s')", document_type)
        raise HTTPException(status_code=400, detail=f"Unknown document type: {document_type}")

    try:
        record = svc.get_status(document_id, doc_type)
    except NotFoundError as e:
        logger.warning("GET /matching/index -> 404 id='%s'", document_id)
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("GET /matching/index -> 500 id='%s': %s", document_id, e)
        raise HTTPException(status_code=500, detail=f"get_indexing_status failed: {e}")

    return _status_response(record)


@router.get("/my-job-matches", response_model=JobMatchResultsResponse)
def get_my_job_matches(
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    requester: Requester = Depends(get_requester),
    svc: MatchQueryService = Depends(get_match_query_service),
) -> JobMatchResultsResponse:
    logger.info(
        "GET /matching/my-job-matches (start) user='%s' page=%d pageSize=%d",
        requester.user_id,
        page,
        page_size,
    )
    try:
        result = svc.get_job_matches_for_candidate(requester.user_id, page=page, page_size=page_size)
    except ValidationError as e:
        logger.warning("GET /matching/my-job-matches -> 400 (%s)", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("GET /matching/my-job-matches -> 500 user='%s': %s", requester.user_id, e)
        raise HTTPException(status_code=500, detail=f"get_my_job_matches failed: {e}")

    resp = JobMatchResultsResponse(
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        embedding_ready=result.embedding_ready,
        results=[JobMatchResponse(**asdict(m)) for m in result.results],
    )
    logger.info(
        "GET /matching/my-job-matches (done) user='%s' ready=%s total=%d",
        requester.user_id,
        resp.embedding_ready,
        resp.total,
    )
    return resp


@router.get("/jobs/{job_id}/candidates", response_model=CandidateMatchResultsResponse)
def get_candidates_for_job(
    job_id: str,
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    requester: Requester = Depends(get_requester),
    svc: MatchQueryService = Depends(get_match_query_service),
) -> CandidateMatchResultsResponse:
    job_id = (job_id or "").strip()
    logger.info(
        "GET /matching/jobs/{job_id}/candidates (start) job_id='%s' user='%s' admin=%s",
        job_id,
        requester.user_id,
        requester.is_admin,
    )
    try:
        result = svc.get_candidate_matches_for_job(
            job_id,
            requester_id=requester.user_id,
            requester_is_admin=requester.is_admin,
            page=page,
            page_size=page_size,
        )
    except ValidationError as e:
        logger.warning("GET /matching/jobs/{job_id}/candidates -> 400 (%s)", e)
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        logger.warning("GET /matching/jobs/{job_id}/candidates -> 404 job_id='%s'", job_id)
        raise HTTPException(status_code=404, detail=str(e))
    except AccessDeniedError as e:
        logger.warning(
            "GET /matching/jobs/{job_id}/candidates -> 403 job_id='%s' user='%s'", job_id, requester.user_id
        )
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        logger.exception("GET /matching/jobs/{job_id}/candidates -> 500 job_id='%s': %s", job_id, e)
        raise HTTPException(status_code=500, detail=f"get_candidates_for_job failed: {e}")

    resp = CandidateMatchResultsResponse(
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        embedding_ready=result.embedding_ready,
        results=[CandidateMatchResponse(**asdict(m)) for m in result.results],
    )
    logger.info(
        "GET /matching/jobs/{job_id}/candidates (done) job_id='%s' ready=%s total=%d",
        job_id,
        resp.embedding_ready,
        resp.total,
    )
    return resp
