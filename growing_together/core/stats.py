"""Child growth stats and the clamped delta rule.

Pure data + pure functions, no external dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

STAT_MIN = 0
STAT_MAX = 100

STAT_FIELDS = ("bonding", "resilience", "confidence")


@dataclass(frozen=True)
class PlayerStats:
    """Three bounded counters, each 0 ~ 100."""

    bonding: int
    resilience: int
    confidence: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class StatDelta:
    """Change proposed by one outcome.

    The content source is asked for -10 ~ +10 per field but any integer
    is accepted; the result is clamped, never the delta.
    """

    bonding: int = 0
    resilience: int = 0
    confidence: int = 0

    @classmethod
    def zero(cls) -> StatDelta:
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatDelta:
        """Build from a mapping with the three stat keys. Missing keys are 0."""
        return cls(**{name: int(data.get(name) or 0) for name in STAT_FIELDS})

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


INITIAL_STATS = PlayerStats(bonding=50, resilience=30, confidence=30)


def clamp_stat(value: int) -> int:
    """0 ~ 100 clamp."""
    return max(STAT_MIN, min(STAT_MAX, value))


def apply_delta(current: PlayerStats, delta: StatDelta) -> PlayerStats:
    """Return new stats with each field = clamp(current + delta).

    Saturating: out-of-range deltas are absorbed at the boundary.
    """
    return PlayerStats(
        bonding=clamp_stat(current.bonding + delta.bonding),
        resilience=clamp_stat(current.resilience + delta.resilience),
        confidence=clamp_stat(current.confidence + delta.confidence),
    )
