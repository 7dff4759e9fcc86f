"""
Settings for the AgriLingua RAG pipeline.

Services never read Django settings or the environment themselves. A
``RagSettings`` instance is built once (usually from the ``AGRILINGUA`` dict in
Django settings) and handed to the service factories in
``agrilingua.rag.services``.

Example settings::

    AGRILINGUA = {
        "STORAGE_PROVIDER": "pgvector",
        "EMBEDDING_PROVIDER": "openai",
        "EMBEDDING_MODEL": "text-embedding-3-small",
        "EMBEDDING_API_KEY": os.environ.get("OPENAI_API_KEY"),
        "CHAT_PROVIDER": "groq",
        "CHAT_MODEL": "llama-3.3-70b-versatile",
        "CHAT_API_KEY": os.environ.get("GROQ_API_KEY"),
    }
"""

from dataclasses import dataclass, fields, replace
from typing import Any

from django.core.exceptions import ImproperlyConfigured

STORAGE_PROVIDERS = ("pgvector", "inmemory")


@dataclass(frozen=True)
class RagSettings:
    storage_provider: str = "pgvector"

    embedding_provider: str = "openai"
    embedding_model: str = "text-embedding-3-small"
    embedding_api_key: str | None = None
    embedding_api_base: str | None = None
    normalize_embeddings: bool = True

    chat_provider: str = "groq"
    chat_model: str = "llama-3.3-70b-versatile"
    chat_api_key: str | None = None
    chat_api_base: str | None = None
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500

    max_chunk_size: int = 1500
    min_chunk_size: int = 50
    insert_batch_size: int = 50

    default_top_k: int = 5
    retrieval_match_threshold: float = 0.5
    chat_match_threshold: float = 0.3

    def __post_init__(self):
        if self.storage_provider not in STORAGE_PROVIDERS:
            raise ImproperlyConfigured(
                f"Unknown storage provider '{self.storage_provider}', "
                f"expected one of {', '.join(STORAGE_PROVIDERS)}"
            )
        for name in ("max_chunk_size", "insert_batch_size", "default_top_k"):
            if getattr(self, name) < 1:
                raise ImproperlyConfigured(f"{name.upper()} must be at least 1")
        if self.min_chunk_size < 0:
            raise ImproperlyConfigured("MIN_CHUNK_SIZE cannot be negative")
        for name in ("retrieval_match_threshold", "chat_match_threshold"):
            if not -1.0 <= getattr(self, name) <= 1.0:
                raise ImproperlyConfigured(f"{name.upper()} must be within [-1, 1]")

    @property
    def has_chat_credentials(self) -> bool:
        return bool(self.chat_api_key)

    def with_overrides(self, **overrides: Any) -> "RagSettings":
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> "RagSettings":
        """Build settings from an ``AGRILINGUA``-style dict with upper-case keys."""
        known = {field.name.upper(): field.name for field in fields(cls)}
        unknown = sorted(set(options) - set(known))
        if unknown:
            raise ImproperlyConfigured(
                f"Unknown AGRILINGUA settings: {', '.join(unknown)}"
            )
        return cls(**{known[key]: value for key, value in options.items()})

    @classmethod
    def from_django_settings(cls, settings=None) -> "RagSettings":
        if settings is None:
            from django.conf import settings

        return cls.from_dict(getattr(settings, "AGRILINGUA", {}) or {})
