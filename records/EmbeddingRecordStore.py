# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: EmbeddingRecordStore
# -----------------------------------------------------------------------------

from typing import List, Optional, Protocol, runtime_checkable

from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType


@runtime_checkable
class EmbeddingRecordStore(Protocol):
    """
    One EmbeddingRecord per (document_id, document_type).
    """

    def get_by_document(self, document_id: str, document_type: DocumentType) -> Optional[EmbeddingRecord]:
        ...

    def add(self, record: EmbeddingRecord) -> None:
        """Raises DuplicateRecordError if the key already exists."""
        ...

    def update(self, record: EmbeddingRecord) -> None:
        ...

    def get_pending(self, batch_size: int) -> List[EmbeddingRecord]:
        """Pending records that can still be retried, oldest first."""
        ...

    def test_connection(self) -> bool:
        ...
