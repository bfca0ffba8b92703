"""Age / life-stage progression.

Stage is always derived from age through STAGE_THRESHOLDS; it is never
stored independently of the age it came from.
"""

from __future__ import annotations

from bisect import bisect_right
from enum import Enum


class LifeStage(str, Enum):
    """Life stages, ordered youngest first."""

    INFANT = "infant"
    TODDLER = "toddler"
    PRESCHOOL = "preschool"
    ELEMENTARY = "elementary"
    TEEN = "teen"
    ADULT = "adult"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


STAGE_LABELS: dict[LifeStage, str] = {
    LifeStage.INFANT: "Infant (0-1 yr)",
    LifeStage.TODDLER: "Toddler (1-3 yrs)",
    LifeStage.PRESCHOOL: "Preschool (3-6 yrs)",
    LifeStage.ELEMENTARY: "Elementary (6-12 yrs)",
    LifeStage.TEEN: "Teenager (13-18 yrs)",
    LifeStage.ADULT: "Young Adult (18+ yrs)",
}

# (lower bound inclusive, stage), ascending. Upper bound is the next row.
STAGE_THRESHOLDS: tuple[tuple[int, LifeStage], ...] = (
    (0, LifeStage.INFANT),
    (1, LifeStage.TODDLER),
    (3, LifeStage.PRESCHOOL),
    (6, LifeStage.ELEMENTARY),
    (13, LifeStage.TEEN),
    (18, LifeStage.ADULT),
)

ADULT_AGE = STAGE_THRESHOLDS[-1][0]

_LOWER_BOUNDS = [bound for bound, _ in STAGE_THRESHOLDS]

PLACEHOLDER_IMAGES: dict[str, str] = {
    "infant": "https://picsum.photos/seed/infant/400/300",
    "toddler": "https://picsum.photos/seed/toddler/400/300",
    "school": "https://picsum.photos/seed/schoolchild/400/300",
    "teen": "https://picsum.photos/seed/teenager/400/300",
}

_STAGE_IMAGE_KEYS: dict[LifeStage, str] = {
    LifeStage.INFANT: "infant",
    LifeStage.TODDLER: "toddler",
    LifeStage.PRESCHOOL: "toddler",
    LifeStage.ELEMENTARY: "school",
    LifeStage.TEEN: "teen",
    LifeStage.ADULT: "teen",
}


def stage_for_age(age: int) -> LifeStage:
    """Look up the stage whose interval contains ``age``."""
    if age < 0:
        raise ValueError(f"Age must be non-negative, got {age}")
    return STAGE_THRESHOLDS[bisect_right(_LOWER_BOUNDS, age) - 1][1]


def is_terminal(stage: LifeStage) -> bool:
    return stage is LifeStage.ADULT


def advance_turn(age: int, stage: LifeStage) -> tuple[int, LifeStage]:
    """Advance one turn: +1 year below adulthood, otherwise no change.

    ``stage`` is accepted for symmetry with the caller's state but the
    returned stage comes from the table lookup of the new age only.
    """
    new_age = age + 1 if age < ADULT_AGE else age
    return new_age, stage_for_age(new_age)


def stage_image_url(stage: LifeStage) -> str:
    """Placeholder illustration for a scenario at ``stage``."""
    return PLACEHOLDER_IMAGES[_STAGE_IMAGE_KEYS[stage]]
