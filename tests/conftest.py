# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# never start background threads from the API module under test
os.environ.setdefault("MATCHING_WORKER_ENABLED", "0")

from embedding.StubEmbedder import StubEmbedder  # noqa: E402
from loader.InMemoryDocumentSource import InMemoryDocumentSource  # noqa: E402
from records.InMemoryEmbeddingRecordStore import InMemoryEmbeddingRecordStore  # noqa: E402
from services.IndexingService import IndexingService  # noqa: E402
from services.MatchQueryService import MatchQueryService  # noqa: E402
from vectorstore.InMemoryMatchVectorStore import InMemoryMatchVectorStore  # noqa: E402


@pytest.fixture
def documents() -> InMemoryDocumentSource:
    return InMemoryDocumentSource()


@pytest.fixture
def records() -> InMemoryEmbeddingRecordStore:
    return InMemoryEmbeddingRecordStore()


@pytest.fixture
def store() -> InMemoryMatchVectorStore:
    return InMemoryMatchVectorStore()


@pytest.fixture
def embedder() -> StubEmbedder:
    return StubEmbedder(dimensions=16)


@pytest.fixture
def indexing(records, documents, embedder, store) -> IndexingService:
    return IndexingService(records=records, documents=documents, embedder=embedder, store=store)


@pytest.fixture
def matches(records, documents, store) -> MatchQueryService:
    return MatchQueryService(records=records, documents=documents, store=store)
