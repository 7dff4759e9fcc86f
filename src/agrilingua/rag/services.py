"""
Builds the RAG pipeline from a RagSettings object.

Factories are cached per settings object: a settings value always maps to the
same storage provider (so the in-memory store is shared between requests)
and the same any-llm clients.
"""

import logging
from functools import lru_cache

from agrilingua.conf import RagSettings
from agrilingua.llm import LLMService

from .chat import ChatOrchestrator
from .chunking import ParagraphChunkTransformer
from .embedding import (
    CoreEmbeddingTransformer,
    EmbeddingTransformer,
    UnavailableEmbeddingTransformer,
)
from .ingestion import IngestionService
from .retrieval import RetrievalService
from .storage import InMemoryProvider, PgVectorProvider, StorageProvider

logger = logging.getLogger(__name__)


def get_settings() -> RagSettings:
    return RagSettings.from_django_settings()


@lru_cache(maxsize=None)
def get_storage_provider(settings: RagSettings) -> StorageProvider:
    if settings.storage_provider == "inmemory":
        logger.warning("Using the in-memory chunk store; chunks are not persisted")
        return InMemoryProvider()
    return PgVectorProvider()


@lru_cache(maxsize=None)
def get_embedding_transformer(settings: RagSettings) -> EmbeddingTransformer:
    try:
        llm_service = LLMService.create(
            provider=settings.embedding_provider,
            model=settings.embedding_model,
            api_key=settings.embedding_api_key,
            api_base=settings.embedding_api_base,
        )
    except Exception as e:
        logger.error(
            f"Could not create embedding client for {settings.embedding_provider}: {e}"
        )
        return UnavailableEmbeddingTransformer(str(e))
    return CoreEmbeddingTransformer(
        llm_service, normalize=settings.normalize_embeddings
    )


@lru_cache(maxsize=None)
def get_chat_llm_service(settings: RagSettings) -> LLMService | None:
    if not settings.has_chat_credentials:
        logger.warning("No chat API key configured; chat will use canned responses")
        return None
    try:
        return LLMService.create(
            provider=settings.chat_provider,
            model=settings.chat_model,
            api_key=settings.chat_api_key,
            api_base=settings.chat_api_base,
        )
    except Exception as e:
        logger.error(f"Could not create chat client for {settings.chat_provider}: {e}")
        return None


def build_ingestion_service(settings: RagSettings) -> IngestionService:
    return IngestionService(
        embedding_transformer=get_embedding_transformer(settings),
        storage_provider=get_storage_provider(settings),
        chunk_transformer=ParagraphChunkTransformer(
            max_chunk_size=settings.max_chunk_size,
            min_chunk_size=settings.min_chunk_size,
        ),
        batch_size=settings.insert_batch_size,
    )


def build_retrieval_service(settings: RagSettings) -> RetrievalService:
    return RetrievalService(
        embedding_transformer=get_embedding_transformer(settings),
        storage_provider=get_storage_provider(settings),
        default_top_k=settings.default_top_k,
        match_threshold=settings.retrieval_match_threshold,
    )


def build_chat_orchestrator(settings: RagSettings) -> ChatOrchestrator:
    return ChatOrchestrator(
        retrieval_service=build_retrieval_service(settings),
        llm_service=get_chat_llm_service(settings),
        temperature=settings.chat_temperature,
        max_tokens=settings.chat_max_tokens,
        match_threshold=settings.chat_match_threshold,
        top_k=settings.default_top_k,
    )
