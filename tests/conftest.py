import pytest

from agrilingua.conf import RagSettings
from agrilingua.rag import services
from agrilingua.rag.storage import InMemoryProvider
from testapp.fakes import KeywordEmbeddingTransformer


@pytest.fixture(autouse=True)
def clear_service_caches():
    yield
    services.get_storage_provider.cache_clear()
    services.get_embedding_transformer.cache_clear()
    services.get_chat_llm_service.cache_clear()


@pytest.fixture
def rag_settings():
    return RagSettings(storage_provider="inmemory")


@pytest.fixture
def keyword_embedder():
    return KeywordEmbeddingTransformer()


@pytest.fixture
def in_memory_provider():
    return InMemoryProvider()
