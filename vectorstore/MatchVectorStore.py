# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: MatchVectorStore
# -----------------------------------------------------------------------------

from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from document.SearchDocuments import CandidateSearchDocument, JobSearchDocument
from matching.MatchingEnums import DocumentType

# (document id, similarity score) ordered best first
ScoredIds = List[Tuple[str, float]]


@runtime_checkable
class MatchVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert_job(self, doc: JobSearchDocument) -> None:
        ...

    def upsert_candidate(self, doc: CandidateSearchDocument) -> None:
        ...

    def delete(self, doc_id: str, document_type: DocumentType) -> None:
        ...

    def search_jobs_for_candidate(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        """Active jobs nearest to a candidate embedding."""
        ...

    def search_candidates_for_job(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        """Candidates nearest to a job embedding, excluding NotAvailable."""
        ...

    def get_embedding(self, doc_id: str, document_type: DocumentType) -> Optional[List[float]]:
        ...

    def get_job(self, doc_id: str) -> Optional[JobSearchDocument]:
        ...

    def get_candidate(self, doc_id: str) -> Optional[CandidateSearchDocument]:
        ...
