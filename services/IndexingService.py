# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: IndexingService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from document.DocumentData import CandidateData, JobData
from document.SearchDocuments import CandidateSearchDocument, JobSearchDocument
from embedding.EmbeddingGenerator import EmbeddingGenerator
from loader.DocumentSource import DocumentSource
from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import (
    DuplicateRecordError,
    IndexingCancelledError,
    InvalidTransitionError,
    NotFoundError,
)
from records.EmbeddingRecordStore import EmbeddingRecordStore
from utility.logging_utils import get_class_logger
from vectorstore.MatchVectorStore import MatchVectorStore


def build_job_text(job: JobData) -> str:
    lines: List[str] = [f"Job Title: {job.title}"]
    if job.company_name and job.company_name.strip():
        lines.append(f"Company: {job.company_name}")
    lines.append(f"Type: {job.job_type}, Mode: {job.work_mode}, Level: {job.experience_level}")
    if job.location and job.location.strip():
        lines.append(f"Location: {job.location}, {job.country or ''}")
    lines.append(f"Description: {job.description}")
    if job.requirements and job.requirements.strip():
        lines.append(f"Requirements: {job.requirements}")
    if job.skills:
        lines.append(f"Required Skills: {', '.join(job.skills)}")
    if job.service_now_versions:
        lines.append(f"ServiceNow Versions: {', '.join(job.service_now_versions)}")
    return "\n".join(lines) + "\n"


def build_candidate_text(candidate: CandidateData) -> str:
    lines: List[str] = []
    if candidate.headline and candidate.headline.strip():
        lines.append(f"Headline: {candidate.headline}")
    if candidate.current_role and candidate.current_role.strip():
        lines.append(f"Current Role: {candidate.current_role}")
    lines.append(
        f"Experience: {candidate.years_of_experience} years, Level: {candidate.experience_level}"
    )
    lines.append(f"Availability: {candidate.availability}")
    if candidate.location and candidate.location.strip():
        lines.append(f"Location: {candidate.location}, {candidate.country or ''}")
    if candidate.bio and candidate.bio.strip():
        lines.append(f"Summary: {candidate.bio}")
    if candidate.skills:
        lines.append(f"Skills: {', '.join(candidate.skills)}")
    if candidate.certifications:
        lines.append(f"Certifications: {', '.join(candidate.certifications)}")
    if candidate.service_now_versions:
        lines.append(f"ServiceNow Versions: {', '.join(candidate.service_now_versions)}")
    return "\n".join(lines) + "\n"


class IndexingService:
    """
    Owns the indexing pipeline for job postings and candidate profiles:
      - request_indexing: record intent (Pending), no external calls
      - process_indexing: fetch -> embed -> upsert (or delete) -> mark status

    process_indexing never raises for pipeline failures; the outcome is a
    bool plus the status/error stored on the EmbeddingRecord.
    """

    def __init__(
        self,
        *,
        records: EmbeddingRecordStore,
        documents: DocumentSource,
        embedder: EmbeddingGenerator,
        store: MatchVectorStore,
        logger: logging.Logger | None = None,
    ) -> None:
        self.records = records
        self.documents = documents
        self.embedder = embedder
        self.store = store
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def request_indexing(self, document_id: str, document_type: DocumentType) -> EmbeddingRecord:
        document_id = str(document_id)
        document_type = DocumentType(document_type)

        record = self.records.get_by_document(document_id, document_type)
        if record is None:
            record = EmbeddingRecord.create(document_id, document_type)
            try:
                self.records.add(record)
                self.logger.info("Created EmbeddingRecord for %s %s", document_type.value, document_id)
                return record
            except DuplicateRecordError:
                # concurrent request created it first
                record = self.records.get_by_document(document_id, document_type)
                if record is None:
                    raise

        record.reset_to_pending()
        self.records.update(record)
        self.logger.info(
            "Reset EmbeddingRecord for %s %s to Pending (retry_count=%d)",
            document_type.value,
            document_id,
            record.retry_count,
        )
        return record

    def get_status(self, document_id: str, document_type: DocumentType) -> EmbeddingRecord:
        record = self.records.get_by_document(str(document_id), DocumentType(document_type))
        if record is None:
            raise NotFoundError(str(document_id), "EmbeddingRecord")
        return record

    # -------------------------------------------------------------------------
    def process_indexing(
        self,
        document_id: str,
        document_type: DocumentType,
        cancel: Optional[threading.Event] = None,
    ) -> bool:
        document_id = str(document_id)
        document_type = DocumentType(document_type)

        record = self.records.get_by_document(document_id, document_type)
        if record is None:
            self.logger.warning("No EmbeddingRecord for %s %s", document_type.value, document_id)
            return False

        try:
            record.set_processing()
        except InvalidTransitionError as e:
            self.logger.warning("Skipping %s %s: %s", document_type.value, document_id, e)
            return False
        self.records.update(record)

        try:
            if document_type == DocumentType.JOB:
                self._index_job(document_id, record, cancel)
            else:
                self._index_candidate(document_id, record, cancel)
        except IndexingCancelledError:
            self.logger.warning(
                "Indexing cancelled for %s %s; record left in Processing",
                document_type.value,
                document_id,
            )
            raise
        except Exception as e:
            self.logger.error(
                "Indexing failed for %s %s: %s", document_type.value, document_id, e, exc_info=True
            )
            record.set_failed(str(e))

        # a request_indexing call during this run leaves the stored record
        # Pending; keep it so the newer request is processed
        stored = self.records.get_by_document(document_id, document_type)
        if stored is not None and stored.status != EmbeddingStatus.PROCESSING:
            self.logger.info(
                "Re-index requested for %s %s during processing; keeping %s",
                document_type.value,
                document_id,
                stored.status.value,
            )
            return False

        self.records.update(record)
        self.logger.info(
            "Indexing finished for %s %s: %s", document_type.value, document_id, record.status.value
        )
        return record.status in (EmbeddingStatus.INDEXED, EmbeddingStatus.SKIPPED)

    # -------------------------------------------------------------------------
    @staticmethod
    def _check_cancel(cancel: Optional[threading.Event]) -> None:
        if cancel is not None and cancel.is_set():
            raise IndexingCancelledError("Indexing cancelled")

    def _index_job(
        self,
        job_id: str,
        record: EmbeddingRecord,
        cancel: Optional[threading.Event],
    ) -> None:
        self._check_cancel(cancel)
        job = self.documents.get_job(job_id)
        if job is None:
            raise NotFoundError(job_id, "Job")

        if not job.is_active:
            self._check_cancel(cancel)
            self.store.delete(job_id, DocumentType.JOB)
            record.mark_skipped()
            self.logger.info("Job %s is inactive; removed from index", job_id)
            return

        self._check_cancel(cancel)
        vector = self.embedder.generate(build_job_text(job))

        self._check_cancel(cancel)
        self.store.upsert_job(JobSearchDocument.from_job(job, vector))
        record.set_indexed()

    def _index_candidate(
        self,
        user_id: str,
        record: EmbeddingRecord,
        cancel: Optional[threading.Event],
    ) -> None:
        self._check_cancel(cancel)
        candidate = self.documents.get_candidate(user_id)
        if candidate is None:
            raise NotFoundError(user_id, "CandidateProfile")

        self._check_cancel(cancel)
        vector = self.embedder.generate(build_candidate_text(candidate))

        self._check_cancel(cancel)
        self.store.upsert_candidate(CandidateSearchDocument.from_candidate(candidate, vector))
        record.set_indexed()
