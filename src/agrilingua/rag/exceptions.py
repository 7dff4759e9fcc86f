class RagError(Exception):
    """Base class for errors raised by the RAG pipeline."""

    code = "rag_error"


class EmbeddingFailed(RagError):
    """The embedding model could not produce a vector for a piece of text."""

    code = "embedding_failed"


class EmbeddingUnavailable(EmbeddingFailed):
    """A query could not be embedded, so retrieval cannot run."""

    code = "embedding_unavailable"


class StoreInsertFailed(RagError):
    """The document store rejected a batch of chunks."""

    code = "store_insert_failed"


class StoreQueryFailed(RagError):
    """The document store could not answer a nearest-neighbour query."""

    code = "store_query_failed"


class MalformedRequest(RagError, ValueError):
    code = "malformed_request"
