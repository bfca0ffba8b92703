"""Mock AI provider for testing and fallback."""

import json
from typing import Any, Optional

from growing_together.services.ai.base import AIProvider

MOCK_SCENARIO_RESPONSE = json.dumps(
    {
        "title": "积木塔倒了",
        "description": "孩子花了很久搭起的积木塔突然倒塌，他坐在地上大哭，还把积木扔向墙角。",
        "childDialogue": "我再也不要玩了！",
        "emotion": "frustrated",
        "context": "孩子其实是因为想给你看成品而感到失落，并非单纯发脾气。",
        "choices": [
            {"id": "a", "text": "蹲下来抱抱他：「塔倒了，你一定很难过吧。」", "style": "Empathetic"},
            {"id": "b", "text": "「不许扔东西！马上把积木捡起来。」", "style": "Authoritarian"},
            {"id": "c", "text": "「没关系，那就别玩了，去看电视吧。」", "style": "Permissive"},
        ],
    },
    ensure_ascii=False,
)

MOCK_OUTCOME_RESPONSE = json.dumps(
    {
        "narrative": "孩子慢慢停止了哭泣，靠在你怀里，过了一会儿又拿起了一块积木。",
        "childReaction": "他抽噎着，偷偷看了你一眼。",
        "childDialogue": "我们一起再搭一次好吗？",
        "emotion": "hopeful",
        "feedback": "先接纳情绪，再处理行为。孩子感受到被理解后，更容易自己调整。",
        "statChanges": {"bonding": 5, "resilience": 3, "confidence": 2},
    },
    ensure_ascii=False,
)


class MockProvider(AIProvider):
    """Mock AI provider that returns canned scenario / outcome JSON.

    Used for testing and as a fallback when no API key is configured.
    """

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: Optional[float] = None,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate mock response.

        Returns the outcome JSON for evaluation prompts ("Parent chose"),
        otherwise the scenario JSON.
        """
        if "Parent chose" in prompt:
            return MOCK_OUTCOME_RESPONSE
        return MOCK_SCENARIO_RESPONSE
