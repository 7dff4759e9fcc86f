import json
import logging
from typing import Any

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from agrilingua.conf import RagSettings

from . import services
from .exceptions import EmbeddingUnavailable, MalformedRequest, StoreQueryFailed
from .schema import Chunk, IngestionReport

logger = logging.getLogger(__name__)


def error_response(message: str, *, status: int, code: str | None = None):
    body = {"error": message}
    if code:
        body["code"] = code
    return JsonResponse(body, status=status)


def parse_chunk(item: Any, position: int) -> Chunk:
    if not isinstance(item, dict):
        raise MalformedRequest(f"Chunk {position} must be an object")

    document_name = item.get("document_name")
    content = item.get("content")
    metadata = item.get("metadata")
    if metadata is None:
        metadata = {}

    if not isinstance(document_name, str) or not document_name.strip():
        raise MalformedRequest(f"Chunk {position} is missing document_name")
    if not isinstance(content, str) or not content.strip():
        raise MalformedRequest(f"Chunk {position} is missing content")
    if not isinstance(metadata, dict):
        raise MalformedRequest(f"Chunk {position} metadata must be an object")

    return Chunk(document_name=document_name, content=content, metadata=metadata)


@method_decorator(csrf_exempt, name="dispatch")
class RagView(View):
    """Base view for the JSON endpoints. ``rag_settings`` may be passed to
    ``as_view()``; otherwise it is read from Django settings."""

    http_method_names = ["post"]
    rag_settings: RagSettings | None = None

    def get_rag_settings(self) -> RagSettings:
        return self.rag_settings or services.get_settings()

    def post(self, request):
        try:
            data = json.loads(request.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return error_response("Invalid JSON in request body", status=400)

        if not isinstance(data, dict):
            return error_response("Request body must be a JSON object", status=400)

        try:
            return self.handle(data)
        except MalformedRequest as e:
            return error_response(str(e), status=400, code=e.code)

    def handle(self, data: dict[str, Any]) -> JsonResponse:
        raise NotImplementedError


class IngestionView(RagView):
    def ingestion_response(self, report: IngestionReport) -> JsonResponse:
        if report.accepted == 0 and report.failed_batches:
            return error_response(
                "; ".join(report.errors), status=500, code="store_insert_failed"
            )

        if report.succeeded:
            message = f"Successfully stored {report.accepted} document chunks"
        else:
            message = f"Stored {report.accepted} document chunks"
        if report.rejected:
            message += f", {report.rejected} could not be embedded"
        if report.failed_batches:
            message += f", {report.failed_batches} batches failed"

        return JsonResponse(
            {
                "success": report.succeeded,
                "inserted": report.accepted,
                "rejected": report.rejected,
                "message": message,
            }
        )


class StoreDocumentsView(IngestionView):
    """
    Embed and store pre-chunked documents.

    Expected JSON payload:
    {
        "chunks": [
            {"document_name": "Soil Type Handout", "content": "...", "metadata": {}}
        ]
    }
    """

    def handle(self, data):
        items = data.get("chunks")
        if not isinstance(items, list) or not items:
            raise MalformedRequest("Chunks array is required")

        chunks = [parse_chunk(item, position) for position, item in enumerate(items)]

        rag_settings = self.get_rag_settings()
        eligible = [
            chunk
            for chunk in chunks
            if len(chunk.content.strip()) >= rag_settings.min_chunk_size
        ]
        if len(eligible) < len(chunks):
            logger.info(
                f"Skipping {len(chunks) - len(eligible)} chunks shorter than "
                f"{rag_settings.min_chunk_size} characters"
            )

        service = services.build_ingestion_service(rag_settings)
        return self.ingestion_response(service.ingest_chunks(eligible))


class IngestDocumentView(IngestionView):
    """
    Chunk, embed and store a whole document.

    Expected JSON payload:
    {"document_name": "Irrigation Water Management Guide", "text": "...", "metadata": {}}
    """

    def handle(self, data):
        document_name = data.get("document_name")
        text = data.get("text")
        metadata = data.get("metadata")
        if metadata is None:
            metadata = {}

        if not isinstance(document_name, str) or not document_name.strip():
            raise MalformedRequest("document_name is required")
        if not isinstance(text, str) or not text.strip():
            raise MalformedRequest("text is required")
        if not isinstance(metadata, dict):
            raise MalformedRequest("metadata must be an object")

        service = services.build_ingestion_service(self.get_rag_settings())
        return self.ingestion_response(service.ingest(document_name, text, metadata))


class RagQueryView(RagView):
    """
    Return the stored chunks most similar to a query.

    Expected JSON payload:
    {"query": "How do I test my soil drainage?", "topK": 3}
    """

    def handle(self, data):
        query = data.get("query")
        if not isinstance(query, str) or not query.strip():
            raise MalformedRequest("Query is required")

        top_k = data.get("topK")
        if top_k is not None and (
            isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1
        ):
            raise MalformedRequest("topK must be a positive integer")

        service = services.build_retrieval_service(self.get_rag_settings())
        try:
            results = service.retrieve(query, top_k=top_k)
        except EmbeddingUnavailable as e:
            logger.error(f"Query embedding failed: {e}")
            return error_response(str(e), status=503, code=e.code)
        except StoreQueryFailed as e:
            logger.error(f"Chunk search failed: {e}")
            return error_response(str(e), status=500, code=e.code)

        return JsonResponse(
            {"query": query, "results": [result.as_dict() for result in results]}
        )


class ChatView(RagView):
    """
    Answer a farmer's message, grounded in stored documents when possible.

    Expected JSON payload:
    {"message": "How do I test if my soil drains well?", "language": "english"}
    """

    def handle(self, data):
        message = data.get("message")
        language = data.get("language") or "english"

        if not isinstance(message, str) or not message.strip():
            raise MalformedRequest("Message is required")
        if not isinstance(language, str):
            raise MalformedRequest("language must be a string")

        orchestrator = services.build_chat_orchestrator(self.get_rag_settings())
        reply = orchestrator.reply(message, language)
        return JsonResponse(reply.as_dict())
