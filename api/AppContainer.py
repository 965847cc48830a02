# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

import settings
from config.Config import Config
from embedding.EmbeddingGenerator import EmbeddingGenerator
from embedding.MatchEmbedder import MatchEmbedder
from embedding.StubEmbedder import StubEmbedder
from health.TestRunner import TestRunner
from loader.DocumentSource import DocumentSource
from loader.HttpDocumentSource import HttpDocumentSource
from loader.InMemoryDocumentSource import InMemoryDocumentSource
from records.EmbeddingRecordStore import EmbeddingRecordStore
from records.InMemoryEmbeddingRecordStore import InMemoryEmbeddingRecordStore
from records.SqlEmbeddingRecordStore import SqlEmbeddingRecordStore
from services.EmbeddingWorker import EmbeddingWorker
from services.HealthService import HealthService
from services.IndexingService import IndexingService
from services.MatchQueryService import MatchQueryService
from utility.logging_utils import get_logger
from vectorstore.ChromaMatchVectorStore import ChromaMatchVectorStore
from vectorstore.InMemoryMatchVectorStore import InMemoryMatchVectorStore
from vectorstore.MatchVectorStore import MatchVectorStore

logger = get_logger(__name__)


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Backends are chosen once here from configuration; nothing downstream
    branches on which backend is in use.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        store: Optional[MatchVectorStore] = None,
        records: Optional[EmbeddingRecordStore] = None,
        documents: Optional[DocumentSource] = None,
        embedder: Optional[EmbeddingGenerator] = None,
    ) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        logger.info("AppContainer config: %s", self.cfg.summary())

        # Core infrastructure
        self.store = store or self._build_store()
        self.records = records or self._build_records()
        self.documents = documents or self._build_documents()
        self.embedder = embedder or self._build_embedder()

        # Return a singleton IndexingService instance
        self.indexing_service = IndexingService(
            records=self.records,
            documents=self.documents,
            embedder=self.embedder,
            store=self.store,
        )

        # Return a singleton MatchQueryService instance
        self.match_query_service = MatchQueryService(
            records=self.records,
            documents=self.documents,
            store=self.store,
        )

        # Background processing of Pending records
        self.worker = EmbeddingWorker(indexing=self.indexing_service, records=self.records)

        # Health checks
        self.test_runner = TestRunner(store=self.store, records=self.records, embedder=self.embedder)
        self.health_service = HealthService(test_runner=self.test_runner)

    # -------------------------------------------------------------------------
    def _build_store(self) -> MatchVectorStore:
        if self.cfg.use_chroma:
            logger.info("Vector index backend: Chroma")
            return ChromaMatchVectorStore(cfg=self.cfg)
        logger.warning("Chroma not configured; using in-memory vector index")
        return InMemoryMatchVectorStore()

    def _build_records(self) -> EmbeddingRecordStore:
        if self.cfg.use_sql_store:
            logger.info("Record store backend: SQL")
            return SqlEmbeddingRecordStore(self.cfg.database_url)
        logger.warning("MATCHING_DATABASE_URL not set; using in-memory record store")
        return InMemoryEmbeddingRecordStore()

    def _build_documents(self) -> DocumentSource:
        if self.cfg.jobs_service_url and self.cfg.profiles_service_url:
            logger.info("Document source: HTTP")
            return HttpDocumentSource(cfg=self.cfg)
        logger.warning("Jobs/profiles service URLs not set; using in-memory document source")
        return InMemoryDocumentSource()

    def _build_embedder(self) -> EmbeddingGenerator:
        if self.cfg.use_azure_openai:
            logger.info("Embedding generator: Azure OpenAI")
            return MatchEmbedder(cfg=self.cfg)
        logger.warning("Azure OpenAI not configured; using deterministic stub embeddings")
        return StubEmbedder(dimensions=settings.EMBEDDING_DIMENSIONS)

    # -------------------------------------------------------------------------
    def start(self) -> None:
        if settings.WORKER_ENABLED:
            self.worker.start()
        else:
            logger.info("EmbeddingWorker disabled (MATCHING_WORKER_ENABLED=0)")

    def shutdown(self) -> None:
        self.worker.stop()
        close = getattr(self.documents, "close", None)
        if callable(close):
            close()


# Singleton container instance
app_container = AppContainer()
