# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: MatchingErrors
# -----------------------------------------------------------------------------


class MatchingError(Exception):
    """Base class for every error raised by the matching service."""


class NotFoundError(MatchingError):
    def __init__(self, document_id: str, kind: str) -> None:
        self.document_id = document_id
        self.kind = kind
        super().__init__(f"{kind} document {document_id} not found.")


class AccessDeniedError(MatchingError):
    def __init__(self, message: str = "You do not have access to this resource.") -> None:
        super().__init__(message)


class ValidationError(MatchingError):
    pass


class DuplicateRecordError(MatchingError):
    def __init__(self, document_id: str, document_type: str) -> None:
        self.document_id = document_id
        self.document_type = document_type
        super().__init__(f"EmbeddingRecord already exists for {document_type} {document_id}")


class InvalidTransitionError(MatchingError):
    pass


class TransientIndexingError(MatchingError):
    """
    Fetch, embedding or index-write failure inside the indexing pipeline.
    Recorded on the EmbeddingRecord, never raised out of process_indexing.
    """


class IndexingCancelledError(MatchingError):
    pass
