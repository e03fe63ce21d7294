"""
Tier engine.

Maps an accumulated points balance onto a tier ladder: current tier,
next tier, points still missing and progress inside the current band.
No side effects, no I/O. The ladder is read-only; to change tiers at
runtime build a new TierEngine and swap the reference.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from fideliza.core.tier_rules import ConfigurationError, TierDefinition, validate_ladder


@dataclass(frozen=True)
class TierProgress:
    current_tier: str
    next_tier: str
    points_to_next: int
    progress_percent: float

    @property
    def is_top_tier(self) -> bool:
        return self.current_tier == self.next_tier

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_tier": self.current_tier,
            "next_tier": self.next_tier,
            "points_to_next": self.points_to_next,
            "progress_percent": self.progress_percent,
            "is_top_tier": self.is_top_tier,
        }


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(x, hi))


def _resolve_index(points: int, ladder: Sequence[TierDefinition]) -> int:
    for i in range(len(ladder) - 1, -1, -1):
        if points >= ladder[i].min_points:
            return i
    # below every threshold (negative points): floor tier
    return 0


def _progress(points: int, ladder: Sequence[TierDefinition]) -> TierProgress:
    i = _resolve_index(points, ladder)
    current = ladder[i]

    if i == len(ladder) - 1:
        return TierProgress(
            current_tier=current.name,
            next_tier=current.name,
            points_to_next=0,
            progress_percent=100.0,
        )

    nxt = ladder[i + 1]
    floor = current.min_points
    ceiling = nxt.min_points
    if ceiling == floor:
        raise ConfigurationError(
            f"Tiers {current.name!r} and {nxt.name!r} share min_points={floor}"
        )

    # below the floor tier (negative points) counts as sitting on the floor
    effective = max(points, floor)
    pct = (effective - floor) / (ceiling - floor) * 100
    return TierProgress(
        current_tier=current.name,
        next_tier=nxt.name,
        points_to_next=max(0, ceiling - effective),
        progress_percent=_clamp(pct, 0.0, 100.0),
    )


def resolve_tier(points: int, ladder: Sequence[TierDefinition]) -> str:
    """Name of the highest tier whose min_points <= points (floor tier for negative input)."""
    tiers = validate_ladder(ladder)
    return tiers[_resolve_index(points, tiers)].name


def compute_progress(points: int, ladder: Sequence[TierDefinition]) -> TierProgress:
    tiers = validate_ladder(ladder)
    return _progress(points, tiers)


class TierEngine:
    """
    Tier computations bound to one validated ladder.

    The ladder is checked once here, so resolve/progress never raise
    afterwards regardless of the points passed in.
    """

    def __init__(self, ladder: Sequence[TierDefinition]) -> None:
        self._ladder = validate_ladder(ladder)
        self._by_name = {t.name: t for t in self._ladder}
        self._rank = {t.name: i for i, t in enumerate(self._ladder)}

    @property
    def tiers(self) -> tuple[TierDefinition, ...]:
        return self._ladder

    @property
    def floor_tier(self) -> TierDefinition:
        return self._ladder[0]

    @property
    def top_tier(self) -> TierDefinition:
        return self._ladder[-1]

    def tier(self, name: str) -> TierDefinition | None:
        return self._by_name.get(name)

    def rank(self, name: str) -> int:
        # position in the ladder, -1 when unknown
        return self._rank.get(name, -1)

    def resolve(self, points: int) -> str:
        return self._ladder[_resolve_index(points, self._ladder)].name

    def progress(self, points: int) -> TierProgress:
        return _progress(points, self._ladder)

    def discount_for(self, points: int) -> int:
        return self._ladder[_resolve_index(points, self._ladder)].discount_percent

    def __repr__(self) -> str:
        names = ", ".join(f"{t.name}>={t.min_points}" for t in self._ladder)
        return f"TierEngine({names})"
