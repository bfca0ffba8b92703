"""AI provider module."""

from growing_together.services.ai.base import AIProvider
from growing_together.services.ai.factory import get_ai_provider
from growing_together.services.ai.gemini import GeminiProvider
from growing_together.services.ai.mock import MockProvider

__all__ = [
    "AIProvider",
    "GeminiProvider",
    "MockProvider",
    "get_ai_provider",
]
