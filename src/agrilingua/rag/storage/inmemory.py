import itertools
from typing import Sequence

from ..exceptions import StoreInsertFailed, StoreQueryFailed
from ..schema import EmbeddedChunk, StoredChunk
from .base import BaseStorageQuerySet, StorageProvider


class InMemoryQuerySet(BaseStorageQuerySet["InMemoryProvider"]):
    def run_query(self):
        import numpy as np

        storage_provider = self.storage_provider
        embedding = np.asarray(self.get_query_embedding(), dtype=float)
        query_norm = np.linalg.norm(embedding)
        if query_norm == 0:
            raise StoreQueryFailed("Query embedding has zero length")

        similarities = []
        for chunk in storage_provider.chunks:
            vector = np.asarray(chunk.embedding, dtype=float)
            if vector.shape != embedding.shape:
                raise StoreQueryFailed(
                    f"Query embedding has {embedding.size} dimensions, "
                    f"stored chunk {chunk.id} has {vector.size}"
                )
            cosine_similarity = float(
                np.dot(embedding, vector) / (query_norm * np.linalg.norm(vector))
            )
            if cosine_similarity >= self._match_threshold:
                similarities.append((cosine_similarity, chunk))

        # sorted() is stable, so equal scores keep insertion order
        sorted_similarities = sorted(
            similarities, key=lambda pair: pair[0], reverse=True
        )
        limit = min(self.limit or self._top_k, self._top_k)
        for similarity, chunk in sorted_similarities[
            self.offset : self.offset + limit
        ]:
            yield self.model(
                id=chunk.id,
                document_name=chunk.document_name,
                content=chunk.content,
                metadata=chunk.metadata,
                embedding=chunk.embedding,
                similarity=similarity,
            )


class InMemoryProvider(StorageProvider):
    """Simple in-memory storage for development and testing."""

    base_queryset_cls = InMemoryQuerySet

    def __init__(self):
        self.chunks: list[StoredChunk] = []
        self._ids = itertools.count(1)

    def insert(self, chunks: Sequence[EmbeddedChunk]) -> list[StoredChunk]:
        """Store chunks in memory. A batch containing an unembedded chunk is
        rejected as a whole."""
        for chunk in chunks:
            if not chunk.embedding:
                raise StoreInsertFailed(
                    f"Chunk from '{chunk.document_name}' has no embedding"
                )

        stored = [chunk.stored_as(next(self._ids)) for chunk in chunks]
        self.chunks.extend(stored)
        return stored

    def count(self) -> int:
        return len(self.chunks)

    def document_names(self) -> list[str]:
        return sorted({chunk.document_name for chunk in self.chunks})
