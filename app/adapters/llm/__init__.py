"""LLM adapter layer - abstracts over the upstream model provider."""

from app.adapters.llm.anthropic_client import AnthropicClient
from app.adapters.llm.base import AbstractLLMClient, ChatMessage, ContentBlock, LLMReply
from app.adapters.llm.factory import clear_llm_client_cache, create_llm_client

__all__ = [
    "AbstractLLMClient",
    "AnthropicClient",
    "ChatMessage",
    "ContentBlock",
    "LLMReply",
    "clear_llm_client_cache",
    "create_llm_client",
]
