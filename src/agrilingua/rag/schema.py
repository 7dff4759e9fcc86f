"""
Schema definitions for the RAG pipeline.

A ``Chunk`` is the unit of retrieval: a contiguous slice of a named
document's text. Chunks gain an embedding before they may be stored, and an
``id`` once the document store has accepted them.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Chunk:
    """
    A piece of a document waiting to be embedded.

    ``metadata`` is opaque to the pipeline: it is stored and returned verbatim.
    """

    document_name: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_embedding(self, embedding: list[float]) -> "EmbeddedChunk":
        """Create a new EmbeddedChunk with the given embedding."""
        return EmbeddedChunk(
            document_name=self.document_name,
            content=self.content,
            metadata=self.metadata,
            embedding=embedding,
        )


@dataclass
class EmbeddedChunk(Chunk):
    """A chunk with its vector embedding, ready to be stored."""

    embedding: list[float] = field(default_factory=list)

    def stored_as(self, id: int) -> "StoredChunk":
        return StoredChunk(
            document_name=self.document_name,
            content=self.content,
            metadata=self.metadata,
            embedding=self.embedding,
            id=id,
        )


@dataclass
class StoredChunk(EmbeddedChunk):
    """A chunk as persisted by a storage provider."""

    id: int | None = None


@dataclass
class ScoredChunk:
    """A stored chunk returned by a nearest-neighbour query."""

    chunk: StoredChunk
    similarity: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.chunk.id,
            "document_name": self.chunk.document_name,
            "content": self.chunk.content,
            "metadata": self.chunk.metadata,
            "similarity": self.similarity,
        }


@dataclass
class IngestionReport:
    accepted: int = 0
    rejected: int = 0
    failed_batches: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        if self.accepted == 0 and self.rejected:
            return False
        return self.failed_batches == 0

    def merge(self, other: "IngestionReport") -> "IngestionReport":
        return IngestionReport(
            accepted=self.accepted + other.accepted,
            rejected=self.rejected + other.rejected,
            failed_batches=self.failed_batches + other.failed_batches,
            errors=[*self.errors, *other.errors],
        )


@dataclass
class RetrievedContext:
    """Retrieval succeeded; ``results`` may still be empty."""

    results: list[ScoredChunk]

    @property
    def text(self) -> str:
        return "\n\n".join(result.chunk.content for result in self.results)

    @property
    def document_names(self) -> list[str]:
        names = []
        for result in self.results:
            if result.chunk.document_name not in names:
                names.append(result.chunk.document_name)
        return names


@dataclass
class ContextUnavailable:
    """Retrieval could not run; callers continue without context."""

    reason: str


ContextResult = RetrievedContext | ContextUnavailable
