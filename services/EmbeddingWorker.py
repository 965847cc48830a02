# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-13
# Description: EmbeddingWorker.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import queue
import threading
import zlib
from typing import List, Optional, Set, Tuple

import settings
from matching.MatchingEnums import DocumentType
from matching.MatchingErrors import IndexingCancelledError
from records.EmbeddingRecordStore import EmbeddingRecordStore
from services.IndexingService import IndexingService
from utility.logging_utils import get_class_logger

WorkItem = Tuple[str, DocumentType]


class EmbeddingWorker:
    """
    Background runner for IndexingService.process_indexing.

    Work is routed to a fixed number of shards by (document id, type); each
    shard has one consumer thread, so a given document is never processed
    by two threads at once. A poller thread sweeps the record store for
    Pending records every `interval_seconds`.
    """

    def __init__(
        self,
        *,
        indexing: IndexingService,
        records: EmbeddingRecordStore,
        shards: int = settings.WORKER_SHARDS,
        interval_seconds: float = settings.WORKER_INTERVAL_SECONDS,
        batch_size: int = settings.WORKER_BATCH_SIZE,
        logger: logging.Logger | None = None,
    ) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")

        self.indexing = indexing
        self.records = records
        self.interval_seconds = interval_seconds
        self.batch_size = batch_size
        self.logger = logger or get_class_logger(self.__class__)

        self._queues: List[queue.Queue] = [queue.Queue() for _ in range(shards)]
        self._queued: Set[WorkItem] = set()
        self._queued_lock = threading.Lock()
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def _shard_for(self, item: WorkItem) -> int:
        key = f"{item[1].value}:{item[0]}".encode("utf-8")
        return zlib.crc32(key) % len(self._queues)

    # -------------------------------------------------------------------------
    def submit(self, document_id: str, document_type: DocumentType) -> bool:
        """Queue one document. Returns False if it is already queued."""
        item: WorkItem = (str(document_id), DocumentType(document_type))
        with self._queued_lock:
            if item in self._queued:
                return False
            self._queued.add(item)
            self._queues[self._shard_for(item)].put(item)
        self.logger.debug("Queued %s %s", item[1].value, item[0])
        return True

    def sweep_pending(self) -> int:
        pending = self.records.get_pending(self.batch_size)
        queued = sum(1 for r in pending if self.submit(r.document_id, r.document_type))
        if queued:
            self.logger.info("Queued %d pending record(s)", queued)
        return queued

    def wait_idle(self) -> None:
        """Block until every queued item has been processed."""
        for q in self._queues:
            q.join()

    # -------------------------------------------------------------------------
    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._threads = [
            threading.Thread(target=self._consume, args=(i,), name=f"embedding-shard-{i}", daemon=True)
            for i in range(len(self._queues))
        ]
        self._threads.append(
            threading.Thread(target=self._poll, name="embedding-poller", daemon=True)
        )
        for t in self._threads:
            t.start()
        self.logger.info(
            "EmbeddingWorker started (shards=%d, interval=%.1fs, batch=%d)",
            len(self._queues),
            self.interval_seconds,
            self.batch_size,
        )

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        if not self._threads:
            return
        self._stop.set()
        for q in self._queues:
            q.put(None)
        for t in self._threads:
            t.join(timeout=timeout)
        self._threads = []
        self.logger.info("EmbeddingWorker stopped")

    # -------------------------------------------------------------------------
    def _poll(self) -> None:
        while not self._stop.is_set():
            try:
                self.sweep_pending()
            except Exception as e:
                self.logger.error("Pending sweep failed: %s", e, exc_info=True)
            self._stop.wait(self.interval_seconds)

    def _consume(self, shard: int) -> None:
        q = self._queues[shard]
        while True:
            item = q.get()
            try:
                if item is None:
                    return
                self._run_item(item)
            finally:
                q.task_done()

    def _run_item(self, item: WorkItem) -> None:
        document_id, document_type = item
        with self._queued_lock:
            self._queued.discard(item)
        if self._stop.is_set():
            return
        try:
            ok = self.indexing.process_indexing(document_id, document_type, cancel=self._stop)
            self.logger.info("Processed %s %s (ok=%s)", document_type.value, document_id, ok)
        except IndexingCancelledError:
            self.logger.warning("Processing of %s %s cancelled", document_type.value, document_id)
        except Exception as e:
            self.logger.error(
                "Unexpected error processing %s %s: %s", document_type.value, document_id, e, exc_info=True
            )
