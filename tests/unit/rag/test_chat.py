from unittest import mock

import pytest

from agrilingua.llm import LLMService
from agrilingua.rag.chat import ChatOrchestrator
from agrilingua.rag.fallbacks import (
    GENERIC_RESPONSES,
    REGIONAL_CROP_RESPONSES,
    fallback_response,
    is_regional_crop_question,
)
from agrilingua.rag.prompts import SYSTEM_PROMPTS, build_system_prompt
from agrilingua.rag.retrieval import RetrievalService
from agrilingua.rag.schema import (
    ContextUnavailable,
    RetrievedContext,
    ScoredChunk,
    StoredChunk,
)
from testapp.fakes import completion_response


def scored_chunk(document_name, content, similarity=0.8, id=1):
    return ScoredChunk(
        chunk=StoredChunk(
            id=id, document_name=document_name, content=content, embedding=[1.0]
        ),
        similarity=similarity,
    )


@pytest.fixture
def retrieval_service():
    service = mock.Mock(spec=RetrievalService)
    service.retrieve_context.return_value = RetrievedContext(
        results=[
            scored_chunk("Soil Type Handout", "WSU Percolation Test for Drainage", id=2),
            scored_chunk("Soil Type Handout", "Soil Types and Classification", id=1),
            scored_chunk("Vegetable Garden Planting Guide", "Common Garden Problems", id=9),
        ]
    )
    return service


@pytest.fixture
def llm_service():
    service = mock.Mock(spec=LLMService)
    service.service_id = "LLMService:groq:llama-3.3-70b-versatile"
    service.completion.return_value = completion_response("Dig a hole one foot deep.")
    return service


def system_message(llm_service):
    messages = llm_service.completion.call_args.args[0]
    assert messages[0]["role"] == "system"
    return messages[0]["content"]


class TestChatOrchestrator:
    def test_reply_uses_retrieved_context(self, retrieval_service, llm_service):
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("How do I test my soil drainage?", "english")

        assert reply.response == "Dig a hole one foot deep."
        assert reply.sources == ["Soil Type Handout", "Vegetable Garden Planting Guide"]
        assert reply.used_context
        assert not reply.used_fallback
        retrieval_service.retrieve_context.assert_called_once_with(
            "How do I test my soil drainage?", top_k=5, match_threshold=0.3
        )
        prompt = system_message(llm_service)
        assert "RELEVANT DOCUMENTATION:" in prompt
        assert (
            "WSU Percolation Test for Drainage\n\nSoil Types and Classification" in prompt
        )

    def test_passes_generation_settings(self, retrieval_service, llm_service):
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service,
            llm_service=llm_service,
            temperature=0.2,
            max_tokens=100,
        )

        orchestrator.reply("When should I irrigate?")

        assert llm_service.completion.call_args.kwargs == {
            "temperature": 0.2,
            "max_tokens": 100,
        }
        messages = llm_service.completion.call_args.args[0]
        assert messages[1] == {"role": "user", "content": "When should I irrigate?"}

    def test_unavailable_context_continues_without_documentation(
        self, retrieval_service, llm_service
    ):
        retrieval_service.retrieve_context.return_value = ContextUnavailable(
            reason="Could not embed query"
        )
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("How do I test my soil drainage?")

        assert reply.response == "Dig a hole one foot deep."
        assert reply.sources == []
        assert not reply.used_context
        assert "RELEVANT DOCUMENTATION" not in system_message(llm_service)

    def test_empty_context_has_no_sources(self, retrieval_service, llm_service):
        retrieval_service.retrieve_context.return_value = RetrievedContext(results=[])
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("Hello")

        assert reply.sources == []
        assert not reply.used_context

    def test_prompt_language(self, retrieval_service, llm_service):
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("Yaya zan gwada ƙasa?", "Hausa")

        assert reply.language == "hausa"
        prompt = system_message(llm_service)
        assert prompt.startswith("Kai ne AgriLingua")
        assert "BAYANAI MAI AMFANI:" in prompt

    def test_llm_failure_uses_fallback(self, retrieval_service, llm_service):
        llm_service.completion.side_effect = RuntimeError("rate limited")
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("Which crops should I plant in Kano?", "yoruba")

        assert reply.response == REGIONAL_CROP_RESPONSES["yoruba"]
        assert reply.used_fallback
        assert reply.sources == []

    def test_empty_completion_uses_fallback(self, retrieval_service, llm_service):
        llm_service.completion.return_value = completion_response("   ")
        orchestrator = ChatOrchestrator(
            retrieval_service=retrieval_service, llm_service=llm_service
        )

        reply = orchestrator.reply("My tomato leaves have holes")

        assert reply.response == GENERIC_RESPONSES["english"]
        assert reply.used_fallback

    def test_no_llm_service_uses_fallback(self, retrieval_service):
        orchestrator = ChatOrchestrator(retrieval_service=retrieval_service)

        reply = orchestrator.reply("Ina son shuka a Sokoto", "hausa")

        assert reply.response == REGIONAL_CROP_RESPONSES["hausa"]
        assert reply.as_dict() == {
            "response": REGIONAL_CROP_RESPONSES["hausa"],
            "language": "hausa",
            "sources": [],
        }


class TestFallbacks:
    @pytest.mark.parametrize(
        "message",
        [
            "What grows in Kaduna?",
            "best crops for NORTHERN nigeria",
            "Which crop should I plant this season?",
        ],
    )
    def test_regional_crop_questions(self, message):
        assert is_regional_crop_question(message)

    @pytest.mark.parametrize(
        "message", ["My crop is yellow", "When do I plant yams?", "Soil pH"]
    )
    def test_other_questions(self, message):
        assert not is_regional_crop_question(message)

    def test_unknown_language_falls_back_to_english(self):
        assert fallback_response("Soil pH", "swahili") == GENERIC_RESPONSES["english"]

    def test_every_language_has_responses(self):
        for language in SYSTEM_PROMPTS.languages:
            assert language in GENERIC_RESPONSES
            assert language in REGIONAL_CROP_RESPONSES


class TestSystemPrompt:
    def test_without_context(self):
        prompt = build_system_prompt("english")
        assert prompt.startswith("You are AgriLingua")
        assert "RELEVANT DOCUMENTATION" not in prompt

    def test_with_context(self):
        prompt = build_system_prompt("igbo", "Mulch year-round")
        assert "OZI BARA URU:\nMulch year-round" in prompt

    def test_unknown_language_uses_english(self):
        assert build_system_prompt("french") == build_system_prompt("english")
