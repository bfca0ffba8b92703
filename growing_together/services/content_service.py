"""Content service for generating scenarios and outcomes using AI.

Single gateway for every LLM call the game makes. Failures are surfaced as
ContentGenerationFailure; there is no retry and no fallback content.
"""

from typing import Any, Optional

from growing_together.core.errors import ContentGenerationFailure
from growing_together.core.logging import get_logger
from growing_together.core.models import Choice, Outcome, Scenario
from growing_together.core.progression import stage_image_url
from growing_together.core.stats import StatDelta
from growing_together.services.ai.base import AIProvider
from growing_together.services.content_parser import ResponseParser
from growing_together.services.content_prompts import PromptBuilder
from growing_together.services.content_types import (
    BuiltPrompt,
    ContentConfig,
    ContentRequestType,
    EvaluationContext,
    ScenarioContext,
)

logger = get_logger(__name__)


def _require(data: dict, key: str, request_type: ContentRequestType) -> Any:
    value = data.get(key)
    if value is None:
        raise ContentGenerationFailure(
            f"{request_type.value} response is missing '{key}'"
        )
    return value


def _optional_text(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if not value:
        return None
    return str(value)


class ContentService:
    """Scenario / outcome provider backed by an AIProvider."""

    def __init__(
        self,
        ai_provider: AIProvider,
        config: ContentConfig | None = None,
    ) -> None:
        """Initialize the content service.

        Args:
            ai_provider: The AI provider to use for text generation.
            config: Optional content configuration.
        """
        self.ai = ai_provider
        self._config = config or ContentConfig()
        self._prompt_builder = PromptBuilder(self._config)
        self._parser = ResponseParser()

    # === Scenario ===

    def generate_scenario(self, ctx: ScenarioContext) -> Scenario:
        """Generate the next parenting moment for the child in ``ctx``."""
        built = self._prompt_builder.build_scenario(ctx)
        data = self._call_llm(ContentRequestType.SCENARIO, built)
        scenario = self._to_scenario(data)
        scenario.image_url = stage_image_url(ctx.stage)
        logger.info(
            "Scenario generated: %r (%d choices) for age %d",
            scenario.title,
            len(scenario.choices),
            ctx.age,
        )
        return scenario

    # === Outcome ===

    def evaluate_choice(self, ctx: EvaluationContext) -> Outcome:
        """Judge the parent's choice and propose stat changes."""
        built = self._prompt_builder.build_outcome(ctx)
        data = self._call_llm(ContentRequestType.OUTCOME, built)
        outcome = self._to_outcome(data)
        logger.info("Outcome evaluated: delta=%s", outcome.stat_changes.to_dict())
        return outcome

    # === Internal ===

    def _call_llm(self, request_type: ContentRequestType, built: BuiltPrompt) -> dict:
        """LLM call + JSON parse. Any failure becomes ContentGenerationFailure."""
        if not self.ai.is_available():
            raise ContentGenerationFailure(
                f"AI provider '{self.ai.name}' is not available"
            )

        try:
            raw = self.ai.generate(
                built.user_prompt,
                system_prompt=built.system_prompt,
                max_tokens=built.max_tokens,
                temperature=built.temperature,
                response_schema=built.response_schema,
            )
        except Exception as e:
            logger.warning("LLM call failed for %s: %s", request_type.value, e)
            raise ContentGenerationFailure(
                f"Failed to generate {request_type.value}: {e}"
            ) from e

        return self._parser.parse_json(raw)

    def _to_scenario(self, data: dict) -> Scenario:
        kind = ContentRequestType.SCENARIO
        raw_choices = _require(data, "choices", kind)
        if not isinstance(raw_choices, list) or not raw_choices:
            raise ContentGenerationFailure("scenario response has no choices")

        choices = []
        for index, item in enumerate(raw_choices):
            if not isinstance(item, dict) or not item.get("text"):
                raise ContentGenerationFailure(f"scenario choice {index} is malformed")
            choices.append(
                Choice(
                    id=str(item.get("id") or index),
                    text=str(item["text"]),
                    style=_optional_text(item, "style"),
                )
            )

        return Scenario(
            title=str(_require(data, "title", kind)),
            description=str(_require(data, "description", kind)),
            context=str(data.get("context") or ""),
            choices=choices,
            child_dialogue=_optional_text(data, "childDialogue"),
            emotion=_optional_text(data, "emotion"),
        )

    def _to_outcome(self, data: dict) -> Outcome:
        kind = ContentRequestType.OUTCOME
        raw_changes = _require(data, "statChanges", kind)
        if not isinstance(raw_changes, dict):
            raise ContentGenerationFailure("outcome statChanges is not an object")
        try:
            stat_changes = StatDelta.from_dict(raw_changes)
        except (TypeError, ValueError, OverflowError) as e:
            raise ContentGenerationFailure(f"outcome statChanges is invalid: {e}") from e

        return Outcome(
            narrative=str(_require(data, "narrative", kind)),
            child_reaction=str(_require(data, "childReaction", kind)),
            feedback=str(_require(data, "feedback", kind)),
            stat_changes=stat_changes,
            child_dialogue=_optional_text(data, "childDialogue"),
            emotion=_optional_text(data, "emotion"),
        )
