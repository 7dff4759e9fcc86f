import pytest
from django.conf import settings

if not getattr(settings, "USE_POSTGRES", False):
    pytest.skip(
        "pgvector tests need AGRILINGUA_TEST_DATABASE=postgres",
        allow_module_level=True,
    )

from agrilingua.conf import RagSettings  # noqa: E402
from agrilingua.rag import services  # noqa: E402
from agrilingua.rag.exceptions import StoreInsertFailed, StoreQueryFailed  # noqa: E402
from agrilingua.rag.ingestion import IngestionService  # noqa: E402
from agrilingua.rag.retrieval import RetrievalService  # noqa: E402
from agrilingua.rag.schema import EmbeddedChunk  # noqa: E402
from agrilingua.rag.sources import load_reference_chunks  # noqa: E402
from agrilingua.rag.storage import PgVectorProvider  # noqa: E402
from agrilingua.rag.storage.pgvector.models import DocumentChunk  # noqa: E402

pytestmark = pytest.mark.django_db


def create_embedded_chunk(
    embedding, document_name="Soil Type Handout", content="Test content", metadata=None
):
    """Helper to create an embedded chunk for testing."""
    if metadata is None:
        metadata = {"section": "test"}

    return EmbeddedChunk(
        document_name=document_name,
        content=content,
        metadata=metadata,
        embedding=embedding,
    )


@pytest.fixture
def pg_vector_provider():
    return PgVectorProvider()


class TestPgVectorProvider:
    """Tests for the PgVectorProvider class."""

    def test_initialization(self, pg_vector_provider):
        assert pg_vector_provider.model == DocumentChunk

    def test_default_storage_provider(self):
        assert isinstance(services.get_storage_provider(RagSettings()), PgVectorProvider)

    def test_initialization_with_invalid_model(self):
        invalid_model = type("InvalidModel", (object,), {})

        with pytest.raises(ValueError) as excinfo:
            PgVectorProvider(model=invalid_model)

        assert "must include" in str(excinfo.value)

    def test_insert(self, pg_vector_provider):
        stored = pg_vector_provider.insert(
            [
                create_embedded_chunk([1.0, 0.0, 0.0], content="Chunk 1"),
                create_embedded_chunk([0.0, 1.0, 0.0], content="Chunk 2"),
            ]
        )

        assert DocumentChunk.objects.count() == 2
        assert [chunk.id for chunk in stored] == list(
            DocumentChunk.objects.values_list("pk", flat=True)
        )
        instance = DocumentChunk.objects.get(pk=stored[0].id)
        assert instance.content == "Chunk 1"
        assert instance.metadata == {"section": "test"}
        assert instance.created_at is not None

    def test_insert_rejects_missing_embedding(self, pg_vector_provider):
        with pytest.raises(StoreInsertFailed):
            pg_vector_provider.insert(
                [create_embedded_chunk([1.0, 0.0]), create_embedded_chunk([])]
            )

        assert DocumentChunk.objects.count() == 0

    def test_count_and_document_names(self, pg_vector_provider):
        pg_vector_provider.insert(
            [
                create_embedded_chunk([1.0], document_name="Vegetable Garden Planting Guide"),
                create_embedded_chunk([1.0], document_name="Soil Type Handout"),
                create_embedded_chunk([1.0], document_name="Soil Type Handout"),
            ]
        )

        assert pg_vector_provider.count() == 3
        assert pg_vector_provider.document_names() == [
            "Soil Type Handout",
            "Vegetable Garden Planting Guide",
        ]

    def test_nearest_neighbors(self, pg_vector_provider):
        pg_vector_provider.insert(
            [
                create_embedded_chunk([1.0, 0.0], content="east"),
                create_embedded_chunk([0.8, 0.6], content="north-east"),
                create_embedded_chunk([0.0, 1.0], content="north"),
            ]
        )

        results = pg_vector_provider.nearest_neighbors(
            [1.0, 0.0], match_threshold=0.5, match_count=5
        )

        assert [result.chunk.content for result in results] == ["east", "north-east"]
        assert [result.similarity for result in results] == pytest.approx([1.0, 0.8])

    def test_ties_keep_insertion_order(self, pg_vector_provider):
        pg_vector_provider.insert(
            [
                create_embedded_chunk([1.0, 0.0], content="first"),
                create_embedded_chunk([2.0, 0.0], content="second"),
            ]
        )

        results = pg_vector_provider.nearest_neighbors([1.0, 0.0], match_count=2)

        assert [result.chunk.content for result in results] == ["first", "second"]

    def test_dimension_mismatch_fails_query(self, pg_vector_provider):
        pg_vector_provider.insert([create_embedded_chunk([1.0, 0.0])])

        with pytest.raises(StoreQueryFailed):
            pg_vector_provider.nearest_neighbors([1.0, 0.0, 0.0])

    def test_queryset_run_query_without_embedding(self, pg_vector_provider):
        queryset = pg_vector_provider.objects.all()

        with pytest.raises(ValueError) as excinfo:
            list(queryset)

        assert "embedding filter is required" in str(excinfo.value)

    def test_queryset_with_ordering_raises(self, pg_vector_provider):
        queryset = pg_vector_provider.objects.filter(
            embedding=[0.1, 0.2, 0.3]
        ).order_by("field")

        with pytest.raises(NotImplementedError) as excinfo:
            list(queryset)

        assert "Ordering is not supported" in str(excinfo.value)

    def test_document_class_generation(self, pg_vector_provider):
        doc_class = pg_vector_provider.document_cls

        assert doc_class.__name__ == "PgVectorDocument"
        assert doc_class.Meta.storage_provider is pg_vector_provider


def test_reference_documents_round_trip(keyword_embedder):
    provider = PgVectorProvider()
    IngestionService(
        embedding_transformer=keyword_embedder, storage_provider=provider
    ).ingest_chunks(load_reference_chunks())
    service = RetrievalService(
        embedding_transformer=keyword_embedder, storage_provider=provider
    )

    results = service.retrieve(
        "How do I test my soil drainage?", top_k=3, match_threshold=0.3
    )

    assert results[0].chunk.content.startswith("WSU Percolation Test")
    assert results[0].similarity >= 0.3
