# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: StubEmbedder
# -----------------------------------------------------------------------------
import hashlib
from typing import List

import numpy as np

import settings
from utility.logging_utils import get_class_logger


class StubEmbedder:
    """
    Deterministic pseudo-random unit vectors for local dev and tests.
    The generator is seeded from a hash of the (truncated) text, so identical
    inputs always produce identical vectors.
    """

    def __init__(
            self,
            dimensions: int = settings.EMBEDDING_DIMENSIONS,
            max_chars: int = settings.EMBEDDING_MAX_CHARS,
            logger=None,
    ):
        self.dimensions = dimensions
        self.max_chars = max_chars
        self.calls = 0
        self.logger = logger or get_class_logger(self.__class__)

    def generate(self, text: str) -> List[float]:
        truncated = (text or "")[: self.max_chars]
        self.calls += 1

        digest = hashlib.sha256(truncated.encode("utf-8")).digest()
        rng = np.random.default_rng(int.from_bytes(digest[:8], "big"))
        vec = rng.uniform(-1.0, 1.0, self.dimensions)

        # Unit length so cosine similarity == dot product
        vec = vec / np.linalg.norm(vec)
        return vec.tolist()

    def test_connection(self) -> bool:
        return True
