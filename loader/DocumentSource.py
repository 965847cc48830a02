# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: DocumentSource
# -----------------------------------------------------------------------------

from typing import Optional, Protocol, runtime_checkable

from document.DocumentData import CandidateData, JobData


@runtime_checkable
class DocumentSource(Protocol):
    """
    Read-only access to job postings and candidate profiles owned by
    other services. Returns None when the document does not exist.
    """

    def get_job(self, job_id: str) -> Optional[JobData]:
        ...

    def get_candidate(self, user_id: str) -> Optional[CandidateData]:
        ...
