# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: InMemoryMatchVectorStore
# -----------------------------------------------------------------------------
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TypeVar

import numpy as np

from document.SearchDocuments import CandidateSearchDocument, JobSearchDocument
from matching.MatchingEnums import NOT_AVAILABLE, DocumentType
from utility.logging_utils import get_class_logger
from vectorstore.MatchVectorStore import MatchVectorStore, ScoredIds

D = TypeVar("D", JobSearchDocument, CandidateSearchDocument)

# Synthetic scores for the zero-length query: 0.9, 0.85, 0.80, ...
SYNTHETIC_TOP_SCORE = 0.9
SYNTHETIC_STEP = 0.05


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|), clipped to [-1, 1].
    Mismatched lengths or a zero-norm vector give 0.0.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape or va.size == 0:
        return 0.0

    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / denom, -1.0, 1.0))


@dataclass
class InMemoryMatchVectorStore(MatchVectorStore):
    """
    Exact cosine scan over every stored vector.
    Used for local development, tests and small offline runs.
    """
    logger: Any = None
    _jobs: Dict[str, JobSearchDocument] = field(default_factory=dict, init=False, repr=False)
    _candidates: Dict[str, CandidateSearchDocument] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def test_connection(self) -> bool:
        return True

    def upsert_job(self, doc: JobSearchDocument) -> None:
        with self._lock:
            self._jobs[doc.id] = doc
        self.logger.debug("Upserted job '%s' (dim=%d)", doc.id, len(doc.embedding))

    def upsert_candidate(self, doc: CandidateSearchDocument) -> None:
        with self._lock:
            self._candidates[doc.id] = doc
        self.logger.debug("Upserted candidate '%s' (dim=%d)", doc.id, len(doc.embedding))

    def delete(self, doc_id: str, document_type: DocumentType) -> None:
        with self._lock:
            bucket = self._jobs if document_type == DocumentType.JOB else self._candidates
            removed = bucket.pop(doc_id, None)
        self.logger.info(
            "Deleted %s '%s' from in-memory index (existed=%s)",
            document_type.value,
            doc_id,
            removed is not None,
        )

    def search_jobs_for_candidate(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        with self._lock:
            docs = [d for d in self._jobs.values() if d.is_active]
        return self._rank(docs, vector, top_k)

    def search_candidates_for_job(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        with self._lock:
            docs = [d for d in self._candidates.values() if d.availability != NOT_AVAILABLE]
        return self._rank(docs, vector, top_k)

    def get_embedding(self, doc_id: str, document_type: DocumentType) -> Optional[List[float]]:
        doc = self.get_job(doc_id) if document_type == DocumentType.JOB else self.get_candidate(doc_id)
        return list(doc.embedding) if doc is not None else None

    def get_job(self, doc_id: str) -> Optional[JobSearchDocument]:
        with self._lock:
            return self._jobs.get(doc_id)

    def get_candidate(self, doc_id: str) -> Optional[CandidateSearchDocument]:
        with self._lock:
            return self._candidates.get(doc_id)

    def count(self, document_type: DocumentType) -> int:
        with self._lock:
            return len(self._jobs if document_type == DocumentType.JOB else self._candidates)

    @staticmethod
    def _rank(docs: List[D], vector: Sequence[float], top_k: int) -> ScoredIds:
        if top_k <= 0:
            return []

        # Zero-length query from deterministic test doubles: fixed descending
        # scores over the stored ids in insertion order
        if len(vector) == 0:
            return [
                (d.id, round(SYNTHETIC_TOP_SCORE - i * SYNTHETIC_STEP, 10))
                for i, d in enumerate(docs[:top_k])
            ]

        scored = [(d.id, cosine_similarity(vector, d.embedding)) for d in docs]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:top_k]
