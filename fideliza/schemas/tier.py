# fideliza/schemas/tier.py
from __future__ import annotations

import json
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TierItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(min_length=1, max_length=40)
    min_points: int = Field(ge=0)
    discount_percent: int = Field(default=0, ge=0, le=100)


class LadderOut(BaseModel):
    tiers: list[TierItem]


class LadderUpdate(BaseModel):
    """
    Full ladder replacement (PUT).
    Accepts a list or its JSON string, as stored in settings.
    """
    model_config = ConfigDict(extra="forbid")

    tiers: list[TierItem]

    @field_validator("tiers", mode="before")
    @classmethod
    def parse_tiers(cls, v):
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
            except ValueError:
                raise ValueError("tiers must be a JSON list")
            return parsed
        return v


class TierProgressOut(BaseModel):
    points: int
    current_tier: str
    next_tier: str
    points_to_next: int = Field(ge=0)
    progress_percent: float = Field(ge=0, le=100)
    is_top_tier: bool
    discount_percent: int


class EarnIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    points: int = Field(default=0, ge=0)
    amount: float = Field(ge=0, allow_inf_nan=False)


class EarnOut(BaseModel):
    earned_points: int
    points_before: int
    points_after: int
    tier_before: str
    tier_after: str
    tier_up: bool


class RewardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    points: int
    icon: str = ""


class RewardsOut(BaseModel):
    rewards: list[RewardOut]
    available: Optional[list[RewardOut]] = None


class RedeemIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    points: int = Field(ge=0)
    reward_id: str


class RedeemOut(BaseModel):
    reward_id: str
    spent: int
    points_after: int
