# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import settings
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import InvalidTransitionError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# status -> statuses it may be entered from
_ALLOWED_FROM = {
    EmbeddingStatus.PROCESSING: {EmbeddingStatus.PENDING},
    EmbeddingStatus.INDEXED: {EmbeddingStatus.PENDING, EmbeddingStatus.PROCESSING},
    EmbeddingStatus.SKIPPED: {EmbeddingStatus.PENDING, EmbeddingStatus.PROCESSING},
    EmbeddingStatus.FAILED: {
        EmbeddingStatus.PENDING,
        EmbeddingStatus.PROCESSING,
        EmbeddingStatus.FAILED,
    },
    EmbeddingStatus.PENDING: set(EmbeddingStatus),
}


@dataclass
class EmbeddingRecord:
    """
    Indexing state of a single document (job posting or candidate profile).

    Status only moves through the transition methods below:

      Pending -> Processing -> Indexed | Skipped | Failed
      any     -> Pending      (re-requested by a caller)

    A document that changes is reset to Pending and picked up again by the
    embedding worker.
    """
    document_id: str
    document_type: DocumentType
    status: EmbeddingStatus = EmbeddingStatus.PENDING
    retry_count: int = 0
    last_indexed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, document_id: str, document_type: DocumentType) -> "EmbeddingRecord":
        return cls(document_id=str(document_id), document_type=DocumentType(document_type))

    @property
    def key(self) -> tuple[str, DocumentType]:
        return self.document_id, self.document_type

    @property
    def can_retry(self) -> bool:
        return self.retry_count < settings.MAX_RETRIES

    @property
    def is_ready(self) -> bool:
        return self.status == EmbeddingStatus.INDEXED

    def _move_to(self, target: EmbeddingStatus) -> None:
        if self.status not in _ALLOWED_FROM[target]:
            raise InvalidTransitionError(
                f"{self.document_type.value} {self.document_id}: "
                f"cannot move from {self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = _utcnow()

    def set_processing(self) -> None:
        self._move_to(EmbeddingStatus.PROCESSING)

    def set_indexed(self) -> None:
        self._move_to(EmbeddingStatus.INDEXED)
        self.last_indexed_at = self.updated_at
        self.retry_count = 0
        self.error_message = None

    def mark_skipped(self) -> None:
        # Document deliberately absent from the index; last_indexed_at is untouched
        self._move_to(EmbeddingStatus.SKIPPED)
        self.retry_count = 0
        self.error_message = None

    def set_failed(self, message: str) -> None:
        self._move_to(EmbeddingStatus.FAILED)
        self.error_message = message
        self.retry_count += 1

    def reset_to_pending(self) -> None:
        # retry_count survives; only set_indexed / mark_skipped clear it
        self._move_to(EmbeddingStatus.PENDING)
