import logging
from abc import ABC, abstractmethod

import numpy as np

from agrilingua.llm import LLMService

from .exceptions import EmbeddingFailed

logger = logging.getLogger(__name__)


def normalize(vector) -> list[float]:
    """Scale a vector to unit length so cosine similarity is a dot product."""
    array = np.asarray(vector, dtype=float)
    if array.ndim != 1 or array.size == 0:
        raise EmbeddingFailed("Embedding model returned an empty vector")
    norm = np.linalg.norm(array)
    if not np.isfinite(norm) or norm == 0:
        raise EmbeddingFailed("Embedding model returned a zero or invalid vector")
    return (array / norm).tolist()


class EmbeddingTransformer(ABC):
    """Base class for embedding transformers which turn text into vectors."""

    @property
    def transformer_id(self) -> str:
        """Get unique identifier for this transformer."""
        return self.__class__.__name__

    @abstractmethod
    def embed_string(self, text: str) -> list[float]:
        """Embed a string, raising EmbeddingFailed if no vector can be produced."""
        pass


class CoreEmbeddingTransformer(EmbeddingTransformer):
    """Embedding transformer that uses the core embeddings API."""

    def __init__(self, llm_service: LLMService, *, normalize: bool = True):
        """Initialize with a core LLM Service instance.

        Args:
            llm_service: The LLM service bound to an embedding model
            normalize: Scale returned vectors to unit length
        """
        self.llm_service = llm_service
        self.normalize = normalize

    @property
    def transformer_id(self) -> str:
        return f"core_{self.llm_service.service_id}"

    def embed_string(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise EmbeddingFailed("Cannot embed empty text")

        try:
            response = self.llm_service.embedding(text)
            vector = response.data[0].embedding
        except Exception as e:
            logger.debug(f"Embedding request to {self.transformer_id} failed: {e}")
            raise EmbeddingFailed(
                f"Embedding request to {self.llm_service.service_id} failed: {e}"
            ) from e

        if not vector:
            raise EmbeddingFailed("Embedding model returned an empty vector")

        if self.normalize:
            return normalize(vector)
        return [float(value) for value in vector]


class UnavailableEmbeddingTransformer(EmbeddingTransformer):
    """Stands in for an embedding model that could not be set up, failing
    every request with the original reason."""

    def __init__(self, reason: str):
        self.reason = reason

    def embed_string(self, text: str) -> list[float]:
        raise EmbeddingFailed(f"Embedding model unavailable: {self.reason}")
