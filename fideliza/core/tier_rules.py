from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping


class ConfigurationError(ValueError):
    """Tier ladder is empty, unsorted, has duplicate thresholds or is otherwise unusable."""


@dataclass(frozen=True)
class TierDefinition:
    name: str
    min_points: int
    discount_percent: int = 0


# PRATA is the floor tier: every customer starts there
DEFAULT_LADDER: tuple[TierDefinition, ...] = (
    TierDefinition("PRATA", 0, 5),
    TierDefinition("GOLD", 100, 10),
    TierDefinition("BLACK", 250, 15),
    TierDefinition("DIAMOND", 400, 20),
)


def validate_ladder(ladder: Iterable[TierDefinition]) -> tuple[TierDefinition, ...]:
    """
    Check the ladder invariants and return it as an immutable tuple.

    - at least one tier
    - the first tier starts at 0 points
    - min_points strictly increasing
    - names unique and non-empty, discounts within 0..100
    """
    if ladder is None:
        raise ConfigurationError("Tier ladder is missing")

    tiers = tuple(ladder)
    if not tiers:
        raise ConfigurationError("Tier ladder is empty")

    if tiers[0].min_points != 0:
        raise ConfigurationError(
            f"Floor tier {tiers[0].name!r} must start at 0 points, got {tiers[0].min_points}"
        )

    seen: set[str] = set()
    for i, tier in enumerate(tiers):
        if not (tier.name or "").strip():
            raise ConfigurationError(f"Tier at position {i} has no name")
        if tier.name in seen:
            raise ConfigurationError(f"Duplicate tier name {tier.name!r}")
        seen.add(tier.name)

        if not 0 <= tier.discount_percent <= 100:
            raise ConfigurationError(
                f"Tier {tier.name!r} discount must be within 0..100, got {tier.discount_percent}"
            )

        if i == 0:
            continue
        prev = tiers[i - 1]
        if tier.min_points == prev.min_points:
            raise ConfigurationError(
                f"Tiers {prev.name!r} and {tier.name!r} share min_points={tier.min_points}"
            )
        if tier.min_points < prev.min_points:
            raise ConfigurationError(
                f"Tier {tier.name!r} ({tier.min_points}) is below {prev.name!r} ({prev.min_points}); "
                "ladder must be sorted ascending"
            )

    return tiers


def _whole(value: Any, field: str) -> int:
    # ints and whole-number strings/floats only; 1.5 must not become 1
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a whole number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be a whole number, got {value!r}")
        return int(value)
    return int(value)


def ladder_from_items(items: Iterable[Mapping[str, Any]]) -> tuple[TierDefinition, ...]:
    tiers = []
    for i, item in enumerate(items):
        try:
            tiers.append(
                TierDefinition(
                    name=str(item["name"]).strip(),
                    min_points=_whole(item["min_points"], "min_points"),
                    discount_percent=_whole(item.get("discount_percent", 0), "discount_percent"),
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid tier at position {i}: {e}") from e
    return validate_ladder(tiers)


def ladder_from_json(raw: str) -> tuple[TierDefinition, ...]:
    # Format: [{"name": "PRATA", "min_points": 0, "discount_percent": 5}, ...]
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Tier ladder is not valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise ConfigurationError("Tier ladder JSON must be a list")
    return ladder_from_items(parsed)


def default_ladder() -> tuple[TierDefinition, ...]:
    return validate_ladder(DEFAULT_LADDER)
