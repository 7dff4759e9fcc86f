import logging

from any_llm import AnyLLM

logger = logging.getLogger(__name__)


class LLMService:
    """Light wrapper around any-llm, bound to a single model."""

    def __init__(self, *, client: AnyLLM, model: str):
        self.client = client
        self.model = model

    @classmethod
    def create(
        cls,
        *,
        provider: str,
        model: str,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> "LLMService":
        kwargs = {
            key: value
            for key, value in {"api_key": api_key, "api_base": api_base}.items()
            if value
        }
        client = AnyLLM.create(provider=provider, **kwargs)
        logger.debug(f"Created any-llm client for {provider}:{model}")
        return cls(client=client, model=model)

    @property
    def service_id(self) -> str:
        return f"{self.__class__.__name__}:{self.client.PROVIDER_NAME}:{self.model}"

    def completion(self, messages, **kwargs):
        return self.client.completion(model=self.model, messages=messages, **kwargs)

    def embedding(self, inputs, **kwargs):
        return self.client._embedding(model=self.model, inputs=inputs, **kwargs)
