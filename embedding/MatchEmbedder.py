# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: MatchEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, List, Optional

import numpy as np
from openai import AzureOpenAI

import settings
from config.Config import Config
from utility.logging_utils import get_class_logger


class MatchEmbedder:
    """
    Azure OpenAI embedding generator for job and candidate text.
    One text in, one vector out; long inputs are truncated before submission.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Optional[Any] = None,
            dimensions: int = settings.EMBEDDING_DIMENSIONS,
            max_chars: int = settings.EMBEDDING_MAX_CHARS,
            normalize: bool = True,
            max_retries: int = 3,
            logger=None,
    ):
        self.cfg = cfg
        self.dimensions = dimensions
        self.max_chars = max_chars
        self.normalize = normalize
        self.max_retries = max_retries
        self.logger = logger or get_class_logger(self.__class__)

        if client is None:
            cfg.require("openai_azure_api_key", "openai_azure_endpoint")
            client = AzureOpenAI(
                api_key=cfg.openai_azure_api_key,
                azure_endpoint=cfg.openai_azure_endpoint,
                api_version="2024-10-21",
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        self.client = client
        self.model = cfg.openai_azure_embed_deployment or settings.EMBEDDING_DEPLOYMENT_DEFAULT
        self.logger.info(f"Azure OpenAI embedder initialized '{self.model}', dimensions={self.dimensions}")

    def truncate(self, text: str) -> str:
        return text if len(text) <= self.max_chars else text[: self.max_chars]

    def generate(self, text: str) -> List[float]:
        truncated = self.truncate(text or "")
        if not truncated.strip():
            raise ValueError("Cannot embed empty text")

        self.logger.debug("Generating embedding for %d chars", len(truncated))

        delay = 0.8
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.client.embeddings.create(
                    model=self.model,
                    input=[truncated],
                    dimensions=self.dimensions,
                )
                arr = np.asarray(resp.data[0].embedding, dtype=np.float32)

                if arr.shape != (self.dimensions,):
                    raise ValueError(
                        f"Embedding dimension mismatch: expected {self.dimensions}, got {arr.shape[0]}"
                    )

                # Normalize vectors (cosine-friendly)
                if self.normalize:
                    arr = arr / (np.linalg.norm(arr) + 1e-12)

                return arr.astype(float).tolist()

            except ValueError:
                raise
            except Exception as e:
                self.logger.warning(f"Embedding call failed (attempt {attempt}/{self.max_retries}): {e}")
                if attempt == self.max_retries:
                    raise
                time.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        return []

    def test_connection(self) -> bool:
        try:
            return len(self.generate("ServiceNow matching embedding healthcheck")) == self.dimensions
        except Exception as e:
            self.logger.error("Embedding healthcheck failed: %s", e)
            return False
