from .base import LLMService
from .prompt import Prompt

__all__ = [
    "LLMService",
    "Prompt",
]
