import logging
from typing import TYPE_CHECKING, Any, Iterable

from .chunking import ChunkTransformer, ParagraphChunkTransformer
from .exceptions import EmbeddingFailed, StoreInsertFailed
from .schema import Chunk, EmbeddedChunk, IngestionReport

if TYPE_CHECKING:
    from .embedding import EmbeddingTransformer
    from .storage.base import StorageProvider


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50


class IngestionService:
    """Chunks, embeds and stores documents.

    Every chunk is embedded on its own so that one failure only costs that
    chunk. Embedded chunks are then written in sequential batches; a batch the
    store rejects is reported and skipped, and earlier batches stay stored.
    Ingestion is strictly additive: ingesting a document twice stores its
    chunks twice.
    """

    def __init__(
        self,
        *,
        embedding_transformer: "EmbeddingTransformer",
        storage_provider: "StorageProvider",
        chunk_transformer: ChunkTransformer | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.embedding_transformer = embedding_transformer
        self.storage_provider = storage_provider
        self.chunk_transformer = chunk_transformer or ParagraphChunkTransformer()
        self.batch_size = batch_size

    def chunk_document(
        self,
        document_name: str,
        raw_text: str,
        metadata: dict[str, Any] | None = None,
    ) -> list[Chunk]:
        """Split a document into chunks tagged with their position."""
        if not document_name or not document_name.strip():
            raise ValueError("document_name cannot be empty")

        texts = self.chunk_transformer.transform(raw_text)
        return [
            Chunk(
                document_name=document_name,
                content=text,
                metadata={
                    **(metadata or {}),
                    "chunk_index": index,
                    "total_chunks": len(texts),
                },
            )
            for index, text in enumerate(texts)
        ]

    def ingest(
        self,
        document_name: str,
        raw_text: str,
        metadata: dict[str, Any] | None = None,
    ) -> IngestionReport:
        """Chunk, embed and store a single document."""
        chunks = self.chunk_document(document_name, raw_text, metadata)
        logger.info(f"Split '{document_name}' into {len(chunks)} chunks")
        if not chunks:
            logger.warning(f"No chunks produced for '{document_name}'")
        return self.ingest_chunks(chunks)

    def ingest_chunks(self, chunks: Iterable[Chunk]) -> IngestionReport:
        """Embed and store chunks that were prepared elsewhere."""
        report = IngestionReport()
        embedded: list[EmbeddedChunk] = []

        for chunk in chunks:
            try:
                vector = self.embedding_transformer.embed_string(chunk.content)
            except EmbeddingFailed as e:
                report.rejected += 1
                logger.warning(
                    f"Skipping chunk from '{chunk.document_name}', embedding failed: {e}"
                )
                continue
            embedded.append(chunk.add_embedding(vector))

        for batch_number, start in enumerate(
            range(0, len(embedded), self.batch_size), 1
        ):
            batch = embedded[start : start + self.batch_size]
            try:
                stored = self.storage_provider.insert(batch)
            except StoreInsertFailed as e:
                report.failed_batches += 1
                report.errors.append(f"Batch {batch_number}: {e}")
                logger.warning(
                    f"Batch {batch_number} ({len(batch)} chunks) was not stored: {e}"
                )
                continue

            report.accepted += len(stored)
            logger.debug(f"Stored batch {batch_number}: {len(stored)} chunks")

        logger.info(
            f"Ingestion finished: {report.accepted} stored, {report.rejected} rejected, "
            f"{report.failed_batches} failed batches"
        )
        return report
