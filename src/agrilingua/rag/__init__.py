from .chunking import (
    ChunkTransformer,
    ParagraphChunkTransformer,
    chunk_text,
)
from .embedding import (
    CoreEmbeddingTransformer,
    EmbeddingTransformer,
)
from .exceptions import (
    EmbeddingFailed,
    EmbeddingUnavailable,
    MalformedRequest,
    RagError,
    StoreInsertFailed,
    StoreQueryFailed,
)
from .ingestion import (
    IngestionService,
)
from .retrieval import (
    RetrievalService,
)
from .schema import (
    Chunk,
    ContextUnavailable,
    EmbeddedChunk,
    IngestionReport,
    RetrievedContext,
    ScoredChunk,
    StoredChunk,
)

__all__ = [
    "Chunk",
    "ChunkTransformer",
    "ContextUnavailable",
    "CoreEmbeddingTransformer",
    "EmbeddedChunk",
    "EmbeddingFailed",
    "EmbeddingTransformer",
    "EmbeddingUnavailable",
    "IngestionReport",
    "IngestionService",
    "MalformedRequest",
    "ParagraphChunkTransformer",
    "RagError",
    "RetrievalService",
    "RetrievedContext",
    "ScoredChunk",
    "StoreInsertFailed",
    "StoreQueryFailed",
    "StoredChunk",
    "chunk_text",
]
