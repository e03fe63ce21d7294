"""
Points earning, rewards and tier changes.
"""
from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from fideliza.core.loyalty_rules import DEFAULT_REWARDS, LoyaltyRules, RewardDefinition
from fideliza.core.tier_rules import DEFAULT_LADDER
from fideliza.services.loyalty import (
    InsufficientPointsError,
    apply_points,
    available_rewards,
    points_for_purchase,
    redeem,
)
from fideliza.services.tier import TierEngine


@pytest.fixture
def engine():
    return TierEngine(DEFAULT_LADDER)


class TestPointsForPurchase:
    @pytest.mark.parametrize(
        "amount, expected",
        [(0, 0), (-5, 0), (25, 25), (35.90, 35), (Decimal("99.99"), 99), (5000, 1000)],
    )
    def test_default_rules(self, amount, expected):
        assert points_for_purchase(amount) == expected

    def test_custom_rate_and_cap(self):
        rules = LoyaltyRules(points_per_real=2, max_points_per_purchase=50)
        assert points_for_purchase(10, rules) == 20
        assert points_for_purchase(30, rules) == 50

    @pytest.mark.parametrize("amount", [float("inf"), float("nan"), Decimal("Infinity")])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(ValueError):
            points_for_purchase(amount)

    def test_zero_rate(self):
        assert points_for_purchase(100, LoyaltyRules(points_per_real=0)) == 0

    @given(st.decimals(min_value=-1000, max_value=100_000, places=2))
    def test_earned_within_cap(self, amount):
        earned = points_for_purchase(amount)
        assert 0 <= earned <= 1000


class TestRewards:
    def test_available_rewards_cheapest_first(self):
        ids = [r.id for r in available_rewards(320, DEFAULT_REWARDS)]
        assert ids == ["desconto_10", "barba_perfeita", "produto_vip"]

    def test_no_rewards_for_small_balance(self):
        assert available_rewards(100, DEFAULT_REWARDS) == []

    def test_reward_cost_is_inclusive(self):
        assert [r.id for r in available_rewards(150, DEFAULT_REWARDS)] == ["desconto_10"]

    def test_redeem(self):
        reward = RewardDefinition("barba", "Barba", 30)
        assert redeem(45, reward) == 15
        assert redeem(30, reward) == 0

    def test_redeem_insufficient(self):
        reward = RewardDefinition("corte", "Corte", 50)
        with pytest.raises(InsufficientPointsError) as exc:
            redeem(49, reward)
        assert exc.value.balance == 49
        assert exc.value.required == 50


class TestApplyPoints:
    def test_tier_up(self, engine):
        change = apply_points(95, 10, engine)
        assert change.points_after == 105
        assert (change.tier_before, change.tier_after) == ("PRATA", "GOLD")
        assert change.tier_up

    def test_same_tier(self, engine):
        change = apply_points(100, 20, engine)
        assert change.tier_before == change.tier_after == "GOLD"
        assert not change.tier_up

    def test_balance_never_negative(self, engine):
        change = apply_points(20, -50, engine)
        assert change.points_after == 0
        assert change.tier_after == "PRATA"

    def test_losing_points_is_not_tier_up(self, engine):
        change = apply_points(260, -200, engine)
        assert change.tier_before == "BLACK"
        assert change.tier_after == "PRATA"
        assert not change.tier_up
