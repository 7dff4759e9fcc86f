import logging
from typing import TYPE_CHECKING, Generator, Sequence, Type

from django.db import DatabaseError, transaction

from ...exceptions import StoreInsertFailed, StoreQueryFailed
from ...schema import EmbeddedChunk, StoredChunk
from ..base import BaseStorageDocument, BaseStorageQuerySet, StorageProvider

if TYPE_CHECKING:
    from .models import DocumentChunk

logger = logging.getLogger(__name__)


class PgVectorQuerySet(BaseStorageQuerySet["PgVectorProvider"]):
    """QuerySet implementation for PgVectorProvider."""

    def get_instance(self, val: "DocumentChunk") -> BaseStorageDocument:
        """Convert a Django model instance to a BaseStorageDocument."""
        return self.model(
            id=val.pk,
            document_name=val.document_name,
            content=val.content,
            metadata=val.metadata,
            embedding=[float(value) for value in val.embedding],
            similarity=float(val.similarity),
        )

    def run_query(self) -> Generator[BaseStorageDocument, None, None]:
        """Execute the query and return the results."""
        if not self.storage_provider:
            raise ValueError("Storage provider is required")

        embedding = self.get_query_embedding()

        if self.ordering:
            raise NotImplementedError("Ordering is not supported for querying")

        model = self.storage_provider.model
        limit = min(self.limit or self._top_k, self._top_k)

        queryset = model.objects.nearest(
            embedding,
            match_threshold=self._match_threshold,
            match_count=self.offset + limit,
        )

        try:
            instances = list(queryset)
        except DatabaseError as e:
            raise StoreQueryFailed(f"Nearest-neighbour query failed: {e}") from e

        for instance in instances[self.offset :]:
            yield self.get_instance(instance)


class PgVectorProvider(StorageProvider):
    """
    Chunk storage using PostgreSQL with the pgvector extension.
    """

    base_queryset_cls = PgVectorQuerySet

    def __init__(self, *, model: Type["DocumentChunk"] | None = None):
        """
        Initialize the PgVectorProvider.

        Args:
            model: A Django model with the same fields as DocumentChunk.
        """
        if model:
            self.model = model
        else:
            from .models import DocumentChunk

            self.model = DocumentChunk

        required_fields = [
            "document_name",
            "content",
            "metadata",
            "embedding",
        ]

        for field in required_fields:
            if not hasattr(self.model, field):
                raise ValueError(
                    f"Model class {self.model.__name__} must include '{field}' field"
                )

    def insert(self, chunks: Sequence[EmbeddedChunk]) -> list[StoredChunk]:
        """
        Store one batch of chunks in a single transaction.

        Args:
            chunks: Embedded chunks to store.
        """
        instances = []
        for chunk in chunks:
            if not chunk.embedding:
                raise StoreInsertFailed(
                    f"Chunk from '{chunk.document_name}' has no embedding"
                )
            instances.append(
                self.model(
                    document_name=chunk.document_name,
                    content=chunk.content,
                    metadata=chunk.metadata,
                    embedding=chunk.embedding,
                )
            )

        try:
            with transaction.atomic():
                created = self.model.objects.bulk_create(instances)
        except DatabaseError as e:
            raise StoreInsertFailed(f"Database rejected batch: {e}") from e

        logger.debug(f"Inserted {len(created)} chunks into {self.model._meta.db_table}")
        return [
            chunk.stored_as(instance.pk)
            for chunk, instance in zip(chunks, created, strict=True)
        ]

    def count(self) -> int:
        return self.model.objects.count()

    def document_names(self) -> list[str]:
        return list(
            self.model.objects.order_by("document_name")
            .values_list("document_name", flat=True)
            .distinct()
        )
