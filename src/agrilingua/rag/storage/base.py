from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Iterator, Sequence, TypeVar

from queryish import Queryish, VirtualModel

from ..exceptions import StoreQueryFailed
from ..schema import EmbeddedChunk, ScoredChunk, StoredChunk

StorageProviderType = TypeVar("StorageProviderType", bound="StorageProvider")

DEFAULT_MATCH_THRESHOLD = 0.5
DEFAULT_MATCH_COUNT = 5


class BaseStorageQuerySet(Queryish, Generic[StorageProviderType]):
    """Base Queryish QuerySet for nearest-neighbour queries.

    Subclasses are generated dynamically by Queryish. A query needs an
    ``embedding`` filter; ``match_threshold`` and ``top_k`` narrow the results.
    """

    # Defaults to None even though this isn't a valid type as Queryish
    # uses 'hasattr' to check if it can copy a Meta attribute from the Virtual Model
    storage_provider: StorageProviderType = None  # type: ignore
    model: type["BaseStorageDocument"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._top_k: int = DEFAULT_MATCH_COUNT
        self._match_threshold: float = DEFAULT_MATCH_THRESHOLD

    def top_k(self, k: int) -> "BaseStorageQuerySet":
        """Limit the number of results to the top k."""
        if k < 1:
            raise ValueError("top_k must be at least 1")
        clone = self.clone()
        clone._top_k = k
        return clone

    def match_threshold(self, threshold: float) -> "BaseStorageQuerySet":
        """Only return documents at least this similar to the query embedding."""
        clone = self.clone()
        clone._match_threshold = threshold
        return clone

    def get_query_embedding(self) -> list[float]:
        filter_map = {filter[0]: filter[1] for filter in self.filters}
        embedding = filter_map.pop("embedding", None)
        if embedding is None:
            raise ValueError("embedding filter is required")
        if filter_map:
            raise NotImplementedError(
                f"Unsupported filters: {', '.join(sorted(filter_map))}"
            )
        return list(embedding)

    def run_query(self) -> Iterator["BaseStorageDocument"]:
        """Execute the query and return the results, most similar first."""
        raise NotImplementedError


class BaseStorageDocument(VirtualModel):
    """Base virtual model for stored chunks. Subclasses are generated dynamically by StorageProviders."""

    base_query_class = BaseStorageQuerySet
    pk_field_name = "id"

    id: int
    document_name: str
    content: str
    metadata: dict[str, Any]
    embedding: list[float]
    similarity: float

    class Meta:
        fields = ["id", "document_name", "content", "metadata", "embedding", "similarity"]
        storage_provider: "StorageProvider"

    def __str__(self):
        return f"{self.document_name}#{self.id}"

    def as_scored_chunk(self) -> ScoredChunk:
        return ScoredChunk(
            chunk=StoredChunk(
                id=self.id,
                document_name=self.document_name,
                content=self.content,
                metadata=self.metadata,
                embedding=self.embedding,
            ),
            similarity=float(self.similarity),
        )


class StorageProvider(ABC):
    """Base class for chunk storage backends.

    The core only ever appends chunks and reads them back by similarity;
    there is no update or delete.
    """

    base_queryset_cls: ClassVar[type[BaseStorageQuerySet]]

    @property
    def document_cls(self):
        """Build a document class for this storage provider."""
        meta = type(
            "Meta",
            (BaseStorageDocument.Meta,),
            {
                "storage_provider": self,
            },
        )

        document_class_name = f"{self.__class__.__name__}Document"
        if self.__class__.__name__.endswith("Provider"):
            document_class_name = self.__class__.__name__.replace(
                "Provider", "Document"
            )

        return type(
            document_class_name,
            (BaseStorageDocument,),
            {"Meta": meta, "base_query_class": self.base_queryset_cls},
        )

    @abstractmethod
    def insert(self, chunks: Sequence["EmbeddedChunk"]) -> list["StoredChunk"]:
        """Store one batch of embedded chunks, raising StoreInsertFailed if the
        backend rejects it."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored chunks."""
        ...

    @abstractmethod
    def document_names(self) -> list[str]:
        """Names of the documents that have stored chunks, alphabetically."""
        ...

    def nearest_neighbors(
        self,
        query_vector: Sequence[float],
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
        match_count: int = DEFAULT_MATCH_COUNT,
    ) -> list[ScoredChunk]:
        """Return up to ``match_count`` chunks with cosine similarity of at least
        ``match_threshold``, most similar first."""
        queryset = (
            self.objects.filter(embedding=list(query_vector))
            .match_threshold(match_threshold)
            .top_k(match_count)
        )
        try:
            return [document.as_scored_chunk() for document in queryset]
        except StoreQueryFailed:
            raise
        except ValueError as e:
            raise StoreQueryFailed(str(e)) from e

    @property
    def objects(self):
        return self.document_cls().objects
