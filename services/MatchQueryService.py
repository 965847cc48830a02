# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: MatchQueryService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Iterable, List, Optional, TypeVar

import settings
from loader.DocumentSource import DocumentSource
from matching.MatchingEnums import DocumentType
from matching.MatchingErrors import NotFoundError, ValidationError
from records.EmbeddingRecordStore import EmbeddingRecordStore
from services.AccessGuard import ensure_can_view_job_matches
from utility.logging_utils import get_class_logger
from vectorstore.MatchVectorStore import MatchVectorStore

T = TypeVar("T")


def score_percent(score: float) -> int:
    return max(0, min(100, int(round(score * 100))))


def matched_skills(wanted: Iterable[str], offered: Iterable[str]) -> List[str]:
    """Case-insensitive exact intersection, in the order of `wanted`."""
    offered_keys = {s.strip().lower() for s in offered if s and s.strip()}
    seen = set()
    out: List[str] = []
    for skill in wanted:
        key = (skill or "").strip().lower()
        if key and key in offered_keys and key not in seen:
            seen.add(key)
            out.append(skill)
    return out


@dataclass
class JobMatch:
    job_id: str
    title: str
    company_name: Optional[str]
    location: Optional[str]
    country: Optional[str]
    work_mode: str
    experience_level: str
    salary_min: Optional[float]
    salary_max: Optional[float]
    salary_currency: Optional[str]
    skills_required: List[str]
    score: float
    score_percent: int
    matched_skills: List[str]
    posted_at: Optional[datetime]


@dataclass
class CandidateMatch:
    user_id: str
    full_name: Optional[str]
    headline: Optional[str]
    current_role: Optional[str]
    location: Optional[str]
    years_of_experience: int
    experience_level: str
    availability: str
    skills: List[str]
    certifications: List[str]
    score: float
    score_percent: int
    matched_skills: List[str]
    profile_updated_at: Optional[datetime]


@dataclass
class MatchResults(Generic[T]):
    total: int
    page: int
    page_size: int
    embedding_ready: bool
    results: List[T] = field(default_factory=list)

    @classmethod
    def not_ready(cls, page: int, page_size: int) -> "MatchResults[T]":
        return cls(total=0, page=page, page_size=page_size, embedding_ready=False, results=[])


class MatchQueryService:
    """
    Ranked matches between candidates and jobs.

    A subject whose EmbeddingRecord is not Indexed gets embedding_ready=False
    and no results; that is a normal state, not an error.
    """

    def __init__(
        self,
        *,
        records: EmbeddingRecordStore,
        documents: DocumentSource,
        store: MatchVectorStore,
        top_k: int = settings.SEARCH_TOP_K,
        max_page_size: int = settings.MAX_PAGE_SIZE,
        logger: logging.Logger | None = None,
    ) -> None:
        self.records = records
        self.documents = documents
        self.store = store
        self.top_k = top_k
        self.max_page_size = max_page_size
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def validate_paging(self, page: int, page_size: int) -> None:
        if page < 1:
            raise ValidationError(f"page must be >= 1 (got {page})")
        if page_size < 1 or page_size > self.max_page_size:
            raise ValidationError(
                f"pageSize must be between 1 and {self.max_page_size} (got {page_size})"
            )

    def _is_ready(self, document_id: str, document_type: DocumentType) -> bool:
        record = self.records.get_by_document(document_id, document_type)
        return record is not None and record.is_ready

    def _subject_vector(self, document_id: str, document_type: DocumentType) -> List[float]:
        vector = self.store.get_embedding(document_id, document_type)
        if vector is None:
            self.logger.warning(
                "%s %s is Indexed but has no stored vector", document_type.value, document_id
            )
            return []
        return vector

    @staticmethod
    def _paginate(items: List[T], page: int, page_size: int) -> List[T]:
        start = (page - 1) * page_size
        return items[start:start + page_size]

    # -------------------------------------------------------------------------
    def get_job_matches_for_candidate(
        self,
        candidate_user_id: str,
        page: int = 1,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> MatchResults[JobMatch]:
        self.validate_paging(page, page_size)
        candidate_user_id = str(candidate_user_id)

        if not self._is_ready(candidate_user_id, DocumentType.CANDIDATE_PROFILE):
            self.logger.info("Candidate %s embedding not ready", candidate_user_id)
            return MatchResults.not_ready(page, page_size)

        candidate = self.documents.get_candidate(candidate_user_id)
        candidate_skills = candidate.skills if candidate is not None else []

        vector = self._subject_vector(candidate_user_id, DocumentType.CANDIDATE_PROFILE)
        hits = self.store.search_jobs_for_candidate(vector, top_k=self.top_k)

        matches: List[JobMatch] = []
        for job_id, score in hits:
            doc = self.store.get_job(job_id)
            if doc is None:
                continue
            matches.append(JobMatch(
                job_id=doc.id,
                title=doc.title,
                company_name=doc.company_name,
                location=doc.location,
                country=doc.country,
                work_mode=doc.work_mode,
                experience_level=doc.experience_level,
                salary_min=doc.salary_min,
                salary_max=doc.salary_max,
                salary_currency=doc.salary_currency,
                skills_required=list(doc.skills),
                score=score,
                score_percent=score_percent(score),
                matched_skills=matched_skills(doc.skills, candidate_skills),
                posted_at=doc.created_at,
            ))

        matches.sort(key=lambda m: m.score, reverse=True)
        self.logger.info(
            "Job matches for candidate %s: %d hits, page %d", candidate_user_id, len(matches), page
        )
        return MatchResults(
            total=len(matches),
            page=page,
            page_size=page_size,
            embedding_ready=True,
            results=self._paginate(matches, page, page_size),
        )

    def get_candidate_matches_for_job(
        self,
        job_id: str,
        requester_id: str,
        requester_is_admin: bool,
        page: int = 1,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ) -> MatchResults[CandidateMatch]:
        self.validate_paging(page, page_size)
        job_id = str(job_id)

        job = self.documents.get_job(job_id)
        if job is None:
            raise NotFoundError(job_id, "Job")

        ensure_can_view_job_matches(job, requester_id, requester_is_admin)

        if not self._is_ready(job_id, DocumentType.JOB):
            self.logger.info("Job %s embedding not ready", job_id)
            return MatchResults.not_ready(page, page_size)

        vector = self._subject_vector(job_id, DocumentType.JOB)
        hits = self.store.search_candidates_for_job(vector, top_k=self.top_k)

        matches: List[CandidateMatch] = []
        for user_id, score in hits:
            candidate = self.documents.get_candidate(user_id)
            if candidate is None:
                continue
            matches.append(CandidateMatch(
                user_id=candidate.user_id,
                full_name=candidate.full_name or None,
                headline=candidate.headline,
                current_role=candidate.current_role,
                location=candidate.location,
                years_of_experience=candidate.years_of_experience,
                experience_level=candidate.experience_level,
                availability=candidate.availability,
                skills=list(candidate.skills),
                certifications=list(candidate.certifications),
                score=score,
                score_percent=score_percent(score),
                matched_skills=matched_skills(job.skills, candidate.skills),
                profile_updated_at=candidate.updated_at,
            ))

        matches.sort(key=lambda m: m.score, reverse=True)
        self.logger.info("Candidate matches for job %s: %d hits, page %d", job_id, len(matches), page)
        return MatchResults(
            total=len(matches),
            page=page,
            page_size=page_size,
            embedding_ready=True,
            results=self._paginate(matches, page, page_size),
        )
