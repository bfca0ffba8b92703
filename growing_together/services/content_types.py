"""ContentService type definitions.

Contexts are assembled by the turn controller and handed to the content
provider; BuiltPrompt is what the prompt builder hands to the AI provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from growing_together.core.models import Gender, Outcome, Scenario
from growing_together.core.progression import LifeStage
from growing_together.core.stats import PlayerStats


class ContentRequestType(str, Enum):
    """LLM call type"""

    SCENARIO = "scenario"
    OUTCOME = "outcome"


@dataclass
class ContentConfig:
    """ContentService settings"""

    scenario_temperature: float = 0.8
    outcome_temperature: float = 0.4
    scenario_max_tokens: int = 2048
    outcome_max_tokens: int = 1536
    language: str = "Simplified Chinese (zh-CN)"


@dataclass
class BuiltPrompt:
    """Fully assembled prompt"""

    system_prompt: str
    user_prompt: str
    max_tokens: int
    temperature: float
    response_schema: Optional[dict] = None


@dataclass
class ScenarioContext:
    """Everything the scenario generator needs to know about the child."""

    child_name: str
    age: int
    stage: LifeStage
    gender: Gender
    stats: PlayerStats


@dataclass
class EvaluationContext:
    """One parent decision to be evaluated."""

    scenario_context: str
    scenario_description: str
    child_name: str
    age: int
    chosen_text: str
    chosen_style: Optional[str] = None


class ContentProvider(Protocol):
    """Source of scenario and outcome payloads.

    Implementations raise ContentGenerationFailure on any transport or
    parse failure and never retry on their own.
    """

    def generate_scenario(self, ctx: ScenarioContext) -> Scenario: ...

    def evaluate_choice(self, ctx: EvaluationContext) -> Outcome: ...
