"""Game domain models.

Pure dataclasses, no I/O. Scenario and Outcome are payloads produced by the
content provider; GameSession is owned by the turn controller.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from growing_together.core.progression import LifeStage, is_terminal
from growing_together.core.stats import INITIAL_STATS, PlayerStats, StatDelta


class Gender(str, Enum):
    BOY = "boy"
    GIRL = "girl"


class ChoiceStyle(str, Enum):
    """Parenting style taxonomy the content provider is asked to use.

    Returned styles are not checked against this list.
    """

    AUTHORITATIVE = "Authoritative"
    AUTHORITARIAN = "Authoritarian"
    PERMISSIVE = "Permissive"
    NEGLECTFUL = "Neglectful"
    EMPATHETIC = "Empathetic"


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Choice:
    id: str
    text: str
    style: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "style": self.style}


# Used when the submitted choice id is not among the scenario's choices.
NEUTRAL_CHOICE = Choice(id="", text="Silent observation", style=None)


@dataclass
class Scenario:
    """One parenting moment requiring a response."""

    title: str
    description: str
    context: str  # hidden context, passed back to the evaluation step
    choices: List[Choice]
    child_dialogue: Optional[str] = None
    emotion: Optional[str] = None
    scenario_id: str = field(default_factory=_new_id)
    image_url: Optional[str] = None

    def find_choice(self, choice_id: str) -> Optional[Choice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    def to_dict(self) -> dict[str, Any]:
        # context stays server-side
        return {
            "scenario_id": self.scenario_id,
            "title": self.title,
            "description": self.description,
            "child_dialogue": self.child_dialogue,
            "emotion": self.emotion,
            "image_url": self.image_url,
            "choices": [c.to_dict() for c in self.choices],
        }


@dataclass
class Outcome:
    """Result of one parenting choice."""

    narrative: str
    child_reaction: str
    feedback: str
    stat_changes: StatDelta
    child_dialogue: Optional[str] = None
    emotion: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "narrative": self.narrative,
            "child_reaction": self.child_reaction,
            "feedback": self.feedback,
            "stat_changes": self.stat_changes.to_dict(),
            "child_dialogue": self.child_dialogue,
            "emotion": self.emotion,
        }


@dataclass
class GameSession:
    """One playthrough, from infancy to adulthood.

    Identity fields (names, gender) are fixed at creation. Age, stage,
    stats and the turn log change turn by turn; the log is append-only.
    """

    player_name: str
    child_name: str
    child_gender: Gender
    age: int = 0
    stage: LifeStage = LifeStage.INFANT
    stats: PlayerStats = INITIAL_STATS
    turn_log: List[str] = field(default_factory=list)
    session_id: str = field(default_factory=_new_id)

    @property
    def is_complete(self) -> bool:
        return is_terminal(self.stage)

    def record_turn(self, title: str) -> str:
        """Append a log entry stamped with the current (pre-advance) age."""
        entry = f"Age {self.age}: {title}"
        self.turn_log.append(entry)
        return entry

    def journey_summary(self) -> dict[str, Any]:
        return {
            "child_name": self.child_name,
            "final_age": self.age,
            "final_stats": self.stats.to_dict(),
            "turns": list(self.turn_log),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "player_name": self.player_name,
            "child_name": self.child_name,
            "child_gender": self.child_gender.value,
            "age": self.age,
            "stage": self.stage.value,
            "stage_label": self.stage.label,
            "stats": self.stats.to_dict(),
            "turn_log": list(self.turn_log),
        }
