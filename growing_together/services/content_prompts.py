"""Prompt builders and JSON response schemas, one per request type."""

import logging

from growing_together.core.models import ChoiceStyle
from growing_together.services.content_types import (
    BuiltPrompt,
    ContentConfig,
    EvaluationContext,
    ScenarioContext,
)

logger = logging.getLogger(__name__)

# --- Response Schemas ---

SCENARIO_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "A short title for the event."},
        "description": {
            "type": "STRING",
            "description": "The detailed situation description facing the parent.",
        },
        "childDialogue": {
            "type": "STRING",
            "description": "What the child actually says, if anything.",
        },
        "emotion": {
            "type": "STRING",
            "description": "One-word emotion behind the child's words.",
        },
        "context": {
            "type": "STRING",
            "description": "Hidden context about the child's hidden feelings "
            "or the situation's truth.",
        },
        "choices": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "text": {
                        "type": "STRING",
                        "description": "The dialogue or action the parent takes.",
                    },
                    "style": {
                        "type": "STRING",
                        "description": "The parenting style category "
                        "(e.g., Empathetic, Authoritarian, etc.)",
                    },
                },
                "required": ["id", "text", "style"],
            },
        },
    },
    "required": ["title", "description", "context", "choices"],
}

OUTCOME_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "narrative": {
            "type": "STRING",
            "description": "What happens immediately after the parent's choice.",
        },
        "childReaction": {
            "type": "STRING",
            "description": "Visual description of the child's reaction "
            "(e.g., facial expression).",
        },
        "childDialogue": {
            "type": "STRING",
            "description": "What the child says in response, if anything.",
        },
        "emotion": {
            "type": "STRING",
            "description": "One-word emotion behind the child's reaction.",
        },
        "feedback": {
            "type": "STRING",
            "description": "Psychological analysis of why this choice was good "
            "or bad, and advice for the future.",
        },
        "statChanges": {
            "type": "OBJECT",
            "properties": {
                "bonding": {
                    "type": "INTEGER",
                    "description": "Change in relationship score (-10 to 10)",
                },
                "resilience": {
                    "type": "INTEGER",
                    "description": "Change in resilience score (-10 to 10)",
                },
                "confidence": {
                    "type": "INTEGER",
                    "description": "Change in confidence score (-10 to 10)",
                },
            },
            "required": ["bonding", "resilience", "confidence"],
        },
    },
    "required": ["narrative", "childReaction", "feedback", "statChanges"],
}

# --- System Prompt Templates ---

SCENARIO_SYSTEM_PROMPT = """\
You are a parenting simulation engine.
You write short, realistic everyday moments between a parent and a child.
Respond with a single JSON object and nothing else."""

OUTCOME_SYSTEM_PROMPT = """\
You are a child development expert narrating a parenting simulation.
You judge a parent's response warmly and honestly.
Respond with a single JSON object and nothing else."""


class PromptBuilder:
    """Assembles prompts per request type"""

    def __init__(self, config: ContentConfig):
        self._config = config

    def build_scenario(self, ctx: ScenarioContext) -> BuiltPrompt:
        stats = ctx.stats
        styles = ", ".join(style.value for style in ChoiceStyle)
        user_prompt = f"""\
Child: {ctx.child_name}, Gender: {ctx.gender.value}, Age: {ctx.age}, Stage: {ctx.stage.label}.
Current Stats: Bonding({stats.bonding}), Resilience({stats.resilience}), Confidence({stats.confidence}).

Generate a realistic parenting scenario appropriate for this age.

Specific Focus Areas (mix these randomly or based on age):
- Toddler: Tantrums, eating, potty training, sharing.
- Elementary: Not talking about school, fear of failure (e.g. sports), bullying, homework struggle, lying.
- Teen: Privacy, peer pressure, independence, dating, academic stress.

The scenario should be a specific moment requiring a parental response.
If the child is old enough to talk, include one short line the child says (childDialogue) and its emotion.
Provide 3 distinct choices representing different parenting styles.
Label each choice with one of: {styles}.

Ensure the "Empathetic" choice isn't always obvious; sometimes "Authoritarian" is needed for safety, but usually "Empathetic" helps bonding.

Language: {self._config.language} for all user-facing text."""

        logger.debug(
            "Built scenario prompt: child=%s age=%d stage=%s",
            ctx.child_name,
            ctx.age,
            ctx.stage.value,
        )
        return BuiltPrompt(
            system_prompt=SCENARIO_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=self._config.scenario_max_tokens,
            temperature=self._config.scenario_temperature,
            response_schema=SCENARIO_SCHEMA,
        )

    def build_outcome(self, ctx: EvaluationContext) -> BuiltPrompt:
        user_prompt = f"""\
Context: {ctx.scenario_context}
Situation: {ctx.scenario_description}
Child: {ctx.child_name} ({ctx.age} yo).
Parent chose: "{ctx.chosen_text}" (Style: {ctx.chosen_style}).

Evaluate this choice.
1. How does the child react immediately?
2. How does this affect their long-term growth (Stats)? Each change is an integer from -10 to 10.
3. Provide expert parenting advice (Feedback) explaining the psychology behind the reaction.
   If the parent chose poorly, explain gently why. If they chose well, reinforce why it works.
   E.g., if the child is silent about school, and parent asks "Did you win?", explain why "You look tired" might have been better.

Language: {self._config.language}."""

        return BuiltPrompt(
            system_prompt=OUTCOME_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=self._config.outcome_max_tokens,
            temperature=self._config.outcome_temperature,
            response_schema=OUTCOME_SCHEMA,
        )
