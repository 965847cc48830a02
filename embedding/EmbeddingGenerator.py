# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: EmbeddingGenerator
# -----------------------------------------------------------------------------

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class EmbeddingGenerator(Protocol):
    dimensions: int

    def generate(self, text: str) -> List[float]:
        """Fixed-length vector for the given text (input truncated to a bounded length)."""
        ...

    def test_connection(self) -> bool:
        ...
