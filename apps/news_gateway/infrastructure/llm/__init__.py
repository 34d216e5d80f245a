"""LLM Infrastructure."""

from news_gateway.infrastructure.llm.gemini_client import GeminiTextGenerator

__all__ = ["GeminiTextGenerator"]
