import logging
from typing import TYPE_CHECKING

from .exceptions import EmbeddingFailed, EmbeddingUnavailable, MalformedRequest, StoreQueryFailed
from .schema import ContextResult, ContextUnavailable, RetrievedContext, ScoredChunk

if TYPE_CHECKING:
    from .embedding import EmbeddingTransformer
    from .storage.base import StorageProvider

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
DEFAULT_MATCH_THRESHOLD = 0.5


class RetrievalService:
    """Finds the stored chunks most similar to a query."""

    def __init__(
        self,
        *,
        embedding_transformer: "EmbeddingTransformer",
        storage_provider: "StorageProvider",
        default_top_k: int = DEFAULT_TOP_K,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    ):
        self.embedding_transformer = embedding_transformer
        self.storage_provider = storage_provider
        self.default_top_k = default_top_k
        self.match_threshold = match_threshold

    def retrieve(
        self,
        query: str,
        top_k: int | None = None,
        match_threshold: float | None = None,
    ) -> list[ScoredChunk]:
        """Embed the query and return the nearest chunks, most similar first.

        Raises:
            MalformedRequest: The query is blank or top_k is not positive
            EmbeddingUnavailable: The query could not be embedded
            StoreQueryFailed: The document store could not run the query
        """
        if not query or not query.strip():
            raise MalformedRequest("Search query cannot be empty")

        top_k = self.default_top_k if top_k is None else top_k
        if top_k < 1:
            raise MalformedRequest("topK must be a positive integer")

        threshold = self.match_threshold if match_threshold is None else match_threshold

        try:
            query_embedding = self.embedding_transformer.embed_string(query)
        except EmbeddingFailed as e:
            raise EmbeddingUnavailable(f"Could not embed query: {e}") from e

        results = self.storage_provider.nearest_neighbors(
            query_embedding, match_threshold=threshold, match_count=top_k
        )
        logger.info(
            f"Retrieved {len(results)} chunks (top_k={top_k}, threshold={threshold}) "
            f"for query: {query[:80]}"
        )
        return results

    def retrieve_context(
        self,
        query: str,
        top_k: int | None = None,
        match_threshold: float | None = None,
    ) -> ContextResult:
        """Like retrieve(), but reports an unavailable backend as a
        ContextUnavailable value instead of raising."""
        try:
            results = self.retrieve(
                query, top_k=top_k, match_threshold=match_threshold
            )
        except (EmbeddingUnavailable, StoreQueryFailed) as e:
            logger.warning(f"Retrieval unavailable, continuing without context: {e}")
            return ContextUnavailable(reason=str(e))

        return RetrievedContext(results=results)
