# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: InMemoryDocumentSource.py
# -----------------------------------------------------------------------------
from typing import Dict, Optional

from document.DocumentData import CandidateData, JobData


class InMemoryDocumentSource:
    """Seedable document source for local dev and tests."""

    def __init__(self) -> None:
        self.jobs: Dict[str, JobData] = {}
        self.candidates: Dict[str, CandidateData] = {}

    def seed_job(self, job: JobData) -> JobData:
        self.jobs[str(job.id)] = job
        return job

    def seed_candidate(self, candidate: CandidateData) -> CandidateData:
        self.candidates[str(candidate.user_id)] = candidate
        return candidate

    def get_job(self, job_id: str) -> Optional[JobData]:
        return self.jobs.get(str(job_id))

    def get_candidate(self, user_id: str) -> Optional[CandidateData]:
        return self.candidates.get(str(user_id))
