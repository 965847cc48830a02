# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: InMemoryEmbeddingRecordStore
# -----------------------------------------------------------------------------
import copy
import threading
from typing import Dict, List, Optional, Tuple

import settings
from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import DuplicateRecordError, NotFoundError
from records.EmbeddingRecordStore import EmbeddingRecordStore


class InMemoryEmbeddingRecordStore(EmbeddingRecordStore):
    """
    Dict-backed store. Records are copied on the way in and out so callers
    only see changes they explicitly persisted with update().
    """

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, DocumentType], EmbeddingRecord] = {}
        self._lock = threading.Lock()

    def get_by_document(self, document_id: str, document_type: DocumentType) -> Optional[EmbeddingRecord]:
        with self._lock:
            rec = self._records.get((str(document_id), DocumentType(document_type)))
            return copy.deepcopy(rec) if rec is not None else None

    def add(self, record: EmbeddingRecord) -> None:
        with self._lock:
            if record.key in self._records:
                raise DuplicateRecordError(record.document_id, record.document_type.value)
            self._records[record.key] = copy.deepcopy(record)

    def update(self, record: EmbeddingRecord) -> None:
        with self._lock:
            if record.key not in self._records:
                raise NotFoundError(record.document_id, "EmbeddingRecord")
            self._records[record.key] = copy.deepcopy(record)

    def get_pending(self, batch_size: int) -> List[EmbeddingRecord]:
        with self._lock:
            pending = [
                r for r in self._records.values()
                if r.status == EmbeddingStatus.PENDING and r.retry_count < settings.MAX_RETRIES
            ]
        pending.sort(key=lambda r: r.updated_at)
        return [copy.deepcopy(r) for r in pending[:batch_size]]

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def test_connection(self) -> bool:
        return True
