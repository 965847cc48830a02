# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: AccessGuard
# -----------------------------------------------------------------------------
from document.DocumentData import JobData
from matching.MatchingErrors import AccessDeniedError


def can_view_job_matches(job: JobData, requester_id: str, requester_is_admin: bool) -> bool:
    """Admins see every job; everyone else only the jobs they posted."""
    if requester_is_admin:
        return True
    return str(requester_id) == str(job.employer_id)


def ensure_can_view_job_matches(job: JobData, requester_id: str, requester_is_admin: bool) -> None:
    if not can_view_job_matches(job, requester_id, requester_is_admin):
        raise AccessDeniedError()
