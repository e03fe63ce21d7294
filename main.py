# main.py
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI

from fideliza.api.loyalty import router as loyalty_router
from fideliza.core.config import Settings, settings
from fideliza.core.log import setup_logging
from fideliza.core.loyalty_rules import DEFAULT_REWARDS
from fideliza.services.tier import TierEngine

logger = logging.getLogger("fideliza.main")


def build_tier_engine(cfg: Settings) -> TierEngine:
    # ConfigurationError propagates: the app must not start with a broken ladder
    engine = TierEngine(cfg.tier_ladder())
    logger.info(f"Tier ladder loaded: {engine!r}")
    return engine


setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.APP_NAME} Loyalty")

# -------------------------
# Loyalty config (read-only; ladder is swapped as a whole on update)
# -------------------------
app.state.tier_engine = build_tier_engine(settings)
app.state.loyalty_rules = settings.loyalty_rules()
app.state.rewards = DEFAULT_REWARDS

app.include_router(loyalty_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
