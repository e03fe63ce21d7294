from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from fideliza.core.loyalty_rules import RULES, LoyaltyRules, RewardDefinition
from fideliza.services.tier import TierEngine

logger = logging.getLogger(__name__)


class InsufficientPointsError(ValueError):
    def __init__(self, balance: int, required: int) -> None:
        super().__init__(f"Balance {balance} is below the {required} points required")
        self.balance = balance
        self.required = required


@dataclass(frozen=True)
class PointsChange:
    points_before: int
    points_after: int
    tier_before: str
    tier_after: str
    tier_up: bool


def points_for_purchase(amount: Decimal | float | int, rules: LoyaltyRules = RULES) -> int:
    """Points earned for a purchase: whole points only, capped per purchase."""
    amount = Decimal(str(amount or 0))
    if not amount.is_finite():
        raise ValueError(f"Purchase amount must be finite, got {amount}")
    if amount <= 0:
        return 0
    earned = math.floor(amount * rules.points_per_real)
    return max(0, min(int(earned), rules.max_points_per_purchase))


def available_rewards(points: int, rewards: Iterable[RewardDefinition]) -> list[RewardDefinition]:
    # cheapest first
    affordable = [r for r in rewards if r.points <= points]
    return sorted(affordable, key=lambda r: (r.points, r.id))


def redeem(points: int, reward: RewardDefinition) -> int:
    """Balance left after redeeming `reward`."""
    if points < reward.points:
        logger.info(f"Redeem refused for {reward.id}: balance {points} < {reward.points}")
        raise InsufficientPointsError(points, reward.points)
    return points - reward.points


def apply_points(points: int, delta: int, engine: TierEngine) -> PointsChange:
    after = max(0, int(points) + int(delta))
    before_tier = engine.resolve(points)
    after_tier = engine.resolve(after)
    return PointsChange(
        points_before=int(points),
        points_after=after,
        tier_before=before_tier,
        tier_after=after_tier,
        tier_up=engine.rank(after_tier) > engine.rank(before_tier),
    )
