from fideliza.schemas.tier import (
    TierItem,
    LadderOut,
    LadderUpdate,
    TierProgressOut,
    EarnIn,
    EarnOut,
    RewardOut,
    RewardsOut,
    RedeemIn,
    RedeemOut,
)
__all__ = [
    "TierItem",
    "LadderOut",
    "LadderUpdate",
    "TierProgressOut",
    "EarnIn",
    "EarnOut",
    "RewardOut",
    "RewardsOut",
    "RedeemIn",
    "RedeemOut",
]
