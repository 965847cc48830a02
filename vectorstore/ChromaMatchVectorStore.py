# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: ChromaMatchVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import chromadb
from chromadb import ClientAPI
from chromadb.api.models import Collection

import settings
from config.Config import Config
from document.SearchDocuments import CandidateSearchDocument, JobSearchDocument
from matching.MatchingEnums import NOT_AVAILABLE, DocumentType
from utility.logging_utils import get_class_logger
from vectorstore.MatchVectorStore import MatchVectorStore, ScoredIds

# HNSW graph with cosine distance, so similarity = 1 - distance
COLLECTION_METADATA = {"hnsw:space": "cosine"}

ACTIVE_JOBS_FILTER: Dict[str, Any] = {"is_active": {"$eq": True}}
AVAILABLE_CANDIDATES_FILTER: Dict[str, Any] = {"availability": {"$ne": NOT_AVAILABLE}}


@dataclass
class ChromaMatchVectorStore(MatchVectorStore):
    cfg: Config
    jobs_collection_name: str = settings.JOBS_COLLECTION
    candidates_collection_name: str = settings.CANDIDATES_COLLECTION
    client: Optional[ClientAPI] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.client is None:
            self.cfg.require("chroma_api_key", "chroma_tenant", "chroma_database")
            self.logger.info(
                "Initialising Chroma Cloud client "
                f"(tenant={self.cfg.chroma_tenant}, database={self.cfg.chroma_database})"
            )
            self.client = chromadb.CloudClient(
                tenant=self.cfg.chroma_tenant,
                database=self.cfg.chroma_database,
                api_key=self.cfg.chroma_api_key,
            )

        self.jobs: Collection = self.client.get_or_create_collection(
            name=self.jobs_collection_name,
            metadata=COLLECTION_METADATA,
        )
        self.candidates: Collection = self.client.get_or_create_collection(
            name=self.candidates_collection_name,
            metadata=COLLECTION_METADATA,
        )
        self.logger.info(
            "Chroma collections ready: jobs='%s', candidates='%s'",
            self.jobs_collection_name,
            self.candidates_collection_name,
        )

    def _collection(self, document_type: DocumentType) -> Collection:
        return self.jobs if document_type == DocumentType.JOB else self.candidates

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and both collections?
        """
        try:
            _ = self.jobs.count()
            _ = self.candidates.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    # ------------------------------------------------------------------ writes

    def upsert_job(self, doc: JobSearchDocument) -> None:
        self.jobs.upsert(
            ids=[doc.id],
            documents=[doc.description or doc.title],
            embeddings=[list(doc.embedding)],
            metadatas=[doc.to_metadata()],
        )
        self.logger.info(
            "Upserted job '%s' into Chroma collection '%s'",
            doc.id,
            self.jobs_collection_name,
        )

    def upsert_candidate(self, doc: CandidateSearchDocument) -> None:
        self.candidates.upsert(
            ids=[doc.id],
            documents=[doc.summary or doc.headline or doc.id],
            embeddings=[list(doc.embedding)],
            metadatas=[doc.to_metadata()],
        )
        self.logger.info(
            "Upserted candidate '%s' into Chroma collection '%s'",
            doc.id,
            self.candidates_collection_name,
        )

    def delete(self, doc_id: str, document_type: DocumentType) -> None:
        collection = self._collection(document_type)
        try:
            collection.delete(ids=[doc_id])
        except Exception as e:
            self.logger.error(
                "Failed to delete %s '%s' from collection '%s': %s",
                document_type.value,
                doc_id,
                collection.name,
                e,
            )
            raise
        self.logger.info(
            "Deleted %s '%s' from collection '%s'",
            document_type.value,
            doc_id,
            collection.name,
        )

    # ----------------------------------------------------------------- queries

    def search_jobs_for_candidate(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        return self._query(self.jobs, vector, top_k, ACTIVE_JOBS_FILTER)

    def search_candidates_for_job(self, vector: Sequence[float], top_k: int = 20) -> ScoredIds:
        return self._query(self.candidates, vector, top_k, AVAILABLE_CANDIDATES_FILTER)

    def _query(
            self,
            collection: Collection,
            vector: Sequence[float],
            top_k: int,
            where: Dict[str, Any],
    ) -> ScoredIds:
        if len(vector) == 0 or top_k <= 0:
            self.logger.warning(
                "Skipping Chroma query on '%s': empty query vector or top_k=%d",
                collection.name,
                top_k,
            )
            return []

        available = collection.count()
        if available == 0:
            return []

        # upper bound only; the where filter may leave fewer matches than this
        n_results = min(top_k, available)
        self.logger.debug(
            "Querying Chroma collection '%s' (n_results=%d, where=%s)",
            collection.name,
            n_results,
            where,
        )

        try:
            res = collection.query(
                query_embeddings=[list(vector)],
                n_results=n_results,
                where=where,
                include=["distances"],
            )
        except Exception as e:
            self.logger.error(
                "Chroma query failed on collection '%s': %s",
                collection.name,
                e,
                exc_info=True,
            )
            raise

        ids0: List[str] = (res.get("ids") or [[]])[0]
        dists0: List[float] = (res.get("distances") or [[]])[0]

        matches: ScoredIds = [
            (str(doc_id), 1.0 - float(dist))
            for doc_id, dist in zip(ids0, dists0)
        ]
        self.logger.info(
            "Chroma search complete on '%s': returned %d results (requested %d)",
            collection.name,
            len(matches),
            top_k,
        )
        return matches

    def get_embedding(self, doc_id: str, document_type: DocumentType) -> Optional[List[float]]:
        res = self._collection(document_type).get(ids=[doc_id], include=["embeddings"])
        embeddings = res.get("embeddings")
        if embeddings is None or len(embeddings) == 0:
            return None
        return [float(x) for x in embeddings[0]]

    def get_job(self, doc_id: str) -> Optional[JobSearchDocument]:
        res = self.jobs.get(ids=[doc_id], include=["metadatas", "documents"])
        if not res.get("ids"):
            return None
        return JobSearchDocument.from_metadata(
            doc_id,
            (res.get("metadatas") or [{}])[0] or {},
            text=(res.get("documents") or [""])[0] or "",
        )

    def get_candidate(self, doc_id: str) -> Optional[CandidateSearchDocument]:
        res = self.candidates.get(ids=[doc_id], include=["metadatas", "documents"])
        if not res.get("ids"):
            return None
        return CandidateSearchDocument.from_metadata(
            doc_id,
            (res.get("metadatas") or [{}])[0] or {},
            text=(res.get("documents") or [""])[0] or "",
        )
