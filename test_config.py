import logging

import pytest

from fideliza.core.config import Settings
from fideliza.core.log import setup_logging
from fideliza.core.tier_rules import DEFAULT_LADDER, ConfigurationError


def test_default_ladder_when_unset():
    cfg = Settings(_env_file=None, TIERS_JSON=None)
    assert cfg.tier_ladder() == DEFAULT_LADDER


def test_blank_tiers_json_uses_default():
    cfg = Settings(_env_file=None, TIERS_JSON="   ")
    assert cfg.tier_ladder() == DEFAULT_LADDER


def test_ladder_from_env(monkeypatch):
    monkeypatch.setenv(
        "TIERS_JSON",
        '[{"name": "BASIC", "min_points": 0}, {"name": "VIP", "min_points": 50, "discount_percent": 10}]',
    )
    cfg = Settings(_env_file=None)
    assert [t.name for t in cfg.tier_ladder()] == ["BASIC", "VIP"]


def test_broken_ladder_fails_fast():
    cfg = Settings(
        _env_file=None,
        TIERS_JSON='[{"name": "A", "min_points": 0}, {"name": "B", "min_points": 0}]',
    )
    with pytest.raises(ConfigurationError):
        cfg.tier_ladder()


def test_loyalty_rules_from_env(monkeypatch):
    monkeypatch.setenv("POINTS_PER_REAL", "3")
    monkeypatch.setenv("MAX_POINTS_PER_PURCHASE", "200")
    rules = Settings(_env_file=None).loyalty_rules()
    assert rules.points_per_real == 3
    assert rules.max_points_per_purchase == 200


def test_setup_logging_is_idempotent():
    logger = setup_logging("debug")
    n = len(logger.handlers)
    again = setup_logging("warning")
    assert again is logger
    assert len(again.handlers) == n
    assert again.level == logging.WARNING
