from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fideliza.core.loyalty_rules import LoyaltyRules, RewardDefinition
from fideliza.core.tier_rules import ConfigurationError, ladder_from_items
from fideliza.schemas.tier import (
    EarnIn,
    EarnOut,
    LadderOut,
    LadderUpdate,
    RedeemIn,
    RedeemOut,
    RewardOut,
    RewardsOut,
    TierItem,
    TierProgressOut,
)
from fideliza.services.loyalty import (
    InsufficientPointsError,
    apply_points,
    available_rewards,
    points_for_purchase,
    redeem,
)
from fideliza.services.tier import TierEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/loyalty", tags=["loyalty"])


def get_tier_engine(request: Request) -> TierEngine:
    return request.app.state.tier_engine


def get_loyalty_rules(request: Request) -> LoyaltyRules:
    return request.app.state.loyalty_rules


def get_rewards(request: Request) -> tuple[RewardDefinition, ...]:
    return request.app.state.rewards


def _ladder_out(engine: TierEngine) -> LadderOut:
    return LadderOut(tiers=[TierItem.model_validate(t) for t in engine.tiers])


@router.get("/tiers", response_model=LadderOut)
def read_tiers(engine: TierEngine = Depends(get_tier_engine)) -> LadderOut:
    return _ladder_out(engine)


@router.put("/tiers", response_model=LadderOut)
def replace_tiers(payload: LadderUpdate, request: Request) -> LadderOut:
    try:
        ladder = ladder_from_items(t.model_dump() for t in payload.tiers)
    except ConfigurationError as e:
        logger.warning(f"Tier ladder rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    # whole-engine swap: requests already holding the old engine finish on it
    engine = TierEngine(ladder)
    request.app.state.tier_engine = engine
    logger.info(f"Tier ladder replaced: {engine!r}")
    return _ladder_out(engine)


@router.get("/progress", response_model=TierProgressOut)
def read_progress(
    points: int = Query(...),
    engine: TierEngine = Depends(get_tier_engine),
) -> TierProgressOut:
    progress = engine.progress(points)
    return TierProgressOut(
        points=points,
        discount_percent=engine.discount_for(points),
        **progress.to_dict(),
    )


@router.post("/earn", response_model=EarnOut)
def earn_points(
    payload: EarnIn,
    engine: TierEngine = Depends(get_tier_engine),
    rules: LoyaltyRules = Depends(get_loyalty_rules),
) -> EarnOut:
    earned = points_for_purchase(payload.amount, rules)
    change = apply_points(payload.points, earned, engine)
    return EarnOut(
        earned_points=earned,
        points_before=change.points_before,
        points_after=change.points_after,
        tier_before=change.tier_before,
        tier_after=change.tier_after,
        tier_up=change.tier_up,
    )


@router.get("/rewards", response_model=RewardsOut)
def list_rewards(
    points: int | None = Query(default=None),
    rewards: tuple[RewardDefinition, ...] = Depends(get_rewards),
) -> RewardsOut:
    catalog = [RewardOut.model_validate(r) for r in rewards]
    if points is None:
        return RewardsOut(rewards=catalog)
    affordable = [RewardOut.model_validate(r) for r in available_rewards(points, rewards)]
    return RewardsOut(rewards=catalog, available=affordable)


@router.post("/redeem", response_model=RedeemOut)
def redeem_reward(
    payload: RedeemIn,
    rewards: tuple[RewardDefinition, ...] = Depends(get_rewards),
) -> RedeemOut:
    reward = next((r for r in rewards if r.id == payload.reward_id), None)
    if reward is None:
        raise HTTPException(status_code=404, detail="Reward not found")

    try:
        left = redeem(payload.points, reward)
    except InsufficientPointsError:
        raise HTTPException(status_code=400, detail="Not enough points")

    return RedeemOut(reward_id=reward.id, spent=reward.points, points_after=left)
