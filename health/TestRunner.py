# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from embedding.EmbeddingGenerator import EmbeddingGenerator
from records.EmbeddingRecordStore import EmbeddingRecordStore
from utility.logging_utils import get_class_logger
from vectorstore.MatchVectorStore import MatchVectorStore


class TestRunner:
    """
    Orchestrates connectivity checks and reports a consolidated result.

    Checks included:
      - vector_index     (Chroma collections or in-memory index)
      - record_store     (SQL database or in-memory store)
      - embedding        (Azure OpenAI embeddings or stub)
      - embedding_heavy  (optional: real embedding call with dimension check)
    """

    __test__ = False  # not a pytest class

    def __init__(
        self,
        *,
        store: MatchVectorStore,
        records: EmbeddingRecordStore,
        embedder: EmbeddingGenerator,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.records = records
        self.embedder = embedder
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info("Initialising TestRunner")

    # -------------------------------------------------------------------------
    def run_all(self, run_heavy_embedding: bool = False) -> Dict[str, bool]:
        """
        Run all configured checks.

        :param run_heavy_embedding: If True, also generates a real embedding.
        :return: Dict mapping check names to True/False.
        """
        self.logger.info("Starting health checks (run_heavy_embedding=%s)", run_heavy_embedding)

        checks: Dict[str, Callable[[], bool]] = {
            "vector_index": self.store.test_connection,
            "record_store": self.records.test_connection,
            "embedding": self.embedder.test_connection,
        }
        if run_heavy_embedding:
            checks["embedding_heavy"] = self._embedding_round_trip

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s check raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    def _embedding_round_trip(self) -> bool:
        vec = self.embedder.generate("ServiceNow ITSM developer healthcheck")
        if len(vec) != self.embedder.dimensions:
            self.logger.warning(
                "Dimension mismatch: expected %d, got %d.", self.embedder.dimensions, len(vec)
            )
            return False
        return True

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Health check summary: %d total, %d passed, %d failed", total, passed, failed)

        for name, ok in results.items():
            status = "PASS" if ok else "FAIL"
            self.logger.info("  %s: %s", name, status)
