# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: MatchingEnums
# -----------------------------------------------------------------------------
from enum import Enum


class DocumentType(str, Enum):
    JOB = "Job"
    CANDIDATE_PROFILE = "CandidateProfile"


class EmbeddingStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    INDEXED = "Indexed"
    FAILED = "Failed"
    # Terminal success for documents intentionally kept out of the index
    # (closed or paused jobs)
    SKIPPED = "Skipped"


# Candidates with this availability never show up in job -> candidate matches
NOT_AVAILABLE = "NotAvailable"
