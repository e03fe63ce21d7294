from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fideliza.core.loyalty_rules import LoyaltyRules
from fideliza.core.tier_rules import TierDefinition, default_ladder, ladder_from_json


class Settings(BaseSettings):
    APP_NAME: str = "Fideliza"
    LOG_LEVEL: str = "INFO"

    # --- Tier ladder ---
    # JSON list; empty = built-in PRATA/GOLD/BLACK/DIAMOND ladder
    TIERS_JSON: str | None = None

    # --- Points earning ---
    POINTS_PER_REAL: int = Field(default=1, ge=0)
    MAX_POINTS_PER_PURCHASE: int = Field(default=1000, ge=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def tier_ladder(self) -> tuple[TierDefinition, ...]:
        """Ladder from TIERS_JSON, or the default one. Raises ConfigurationError."""
        raw = (self.TIERS_JSON or "").strip()
        if not raw:
            return default_ladder()
        return ladder_from_json(raw)

    def loyalty_rules(self) -> LoyaltyRules:
        return LoyaltyRules(
            points_per_real=self.POINTS_PER_REAL,
            max_points_per_purchase=self.MAX_POINTS_PER_PURCHASE,
        )


settings = Settings()
