import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .fallbacks import fallback_response
from .prompts import DEFAULT_LANGUAGE, build_system_prompt
from .schema import RetrievedContext

if TYPE_CHECKING:
    from agrilingua.llm import LLMService

    from .retrieval import RetrievalService

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    response: str
    language: str
    sources: list[str] = field(default_factory=list)
    used_context: bool = False
    used_fallback: bool = False

    def as_dict(self) -> dict:
        return {
            "response": self.response,
            "language": self.language,
            "sources": self.sources,
        }


class ChatOrchestrator:
    """Answers a farmer's message with the chat model, grounded in retrieved
    documentation when retrieval is available.

    Neither retrieval nor the chat model is allowed to fail the request:
    without context the model answers on its own, and without a model answer
    the farmer gets canned advice in their language.
    """

    def __init__(
        self,
        *,
        retrieval_service: "RetrievalService",
        llm_service: "LLMService | None" = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
        match_threshold: float = 0.3,
        top_k: int = 5,
    ):
        self.retrieval_service = retrieval_service
        self.llm_service = llm_service
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.match_threshold = match_threshold
        self.top_k = top_k

    def reply(self, message: str, language: str | None = None) -> ChatReply:
        language = (language or DEFAULT_LANGUAGE).strip().lower()

        context = self.retrieval_service.retrieve_context(
            message, top_k=self.top_k, match_threshold=self.match_threshold
        )
        if isinstance(context, RetrievedContext) and context.results:
            logger.info(f"Using {len(context.results)} retrieved chunks as context")
            context_text = context.text
            sources = context.document_names
        else:
            context_text = ""
            sources = []

        answer = self._complete(message, language, context_text)
        if answer is None:
            return ChatReply(
                response=fallback_response(message, language),
                language=language,
                used_fallback=True,
            )

        return ChatReply(
            response=answer,
            language=language,
            sources=sources,
            used_context=bool(context_text),
        )

    def _complete(self, message: str, language: str, context: str) -> str | None:
        if self.llm_service is None:
            logger.info("No chat model configured, using fallback response")
            return None

        messages = [
            {"role": "system", "content": build_system_prompt(language, context)},
            {"role": "user", "content": message},
        ]
        try:
            completion = self.llm_service.completion(
                messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = completion.choices[0].message.content
        except Exception as e:
            logger.warning(f"Chat model {self.llm_service.service_id} failed: {e}")
            return None

        if not content or not content.strip():
            logger.warning("Chat model returned an empty response")
            return None
        return content
