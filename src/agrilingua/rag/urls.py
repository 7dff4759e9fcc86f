from django.urls import path

from .views import ChatView, IngestDocumentView, RagQueryView, StoreDocumentsView


def rag_urls(rag_settings=None) -> list:
    """
    Generate URL patterns for the RAG endpoints.

    Args:
        rag_settings: Optional RagSettings shared by every view; when omitted
            the views read the AGRILINGUA Django setting.

    Example:
        # In your main urls.py
        from agrilingua.rag.urls import rag_urls

        urlpatterns = [
            # ... your other URLs
            path("api/", include(rag_urls())),
        ]
    """
    initkwargs = {"rag_settings": rag_settings} if rag_settings else {}

    return [
        path(
            "store-documents/",
            StoreDocumentsView.as_view(**initkwargs),
            name="rag_store_documents",
        ),
        path(
            "ingest-document/",
            IngestDocumentView.as_view(**initkwargs),
            name="rag_ingest_document",
        ),
        path("rag-query/", RagQueryView.as_view(**initkwargs), name="rag_query"),
        path("chat/", ChatView.as_view(**initkwargs), name="rag_chat"),
    ]
