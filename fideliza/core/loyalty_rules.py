from dataclasses import dataclass


@dataclass(frozen=True)
class LoyaltyRules:
    points_per_real: int = 1          # points earned per R$ 1,00
    max_points_per_purchase: int = 1000


@dataclass(frozen=True)
class RewardDefinition:
    id: str
    name: str
    points: int
    icon: str = ""


DEFAULT_REWARDS: tuple[RewardDefinition, ...] = (
    RewardDefinition("corte_gratis", "Corte Grátis", 500, "🎁"),
    RewardDefinition("produto_vip", "Produto VIP", 300, "💎"),
    RewardDefinition("barba_perfeita", "Barba Perfeita", 200, "✂️"),
    RewardDefinition("desconto_10", "Desconto 10%", 150, "💰"),
    RewardDefinition("produto_gratis", "Produto Grátis", 400, "🎯"),
)


RULES = LoyaltyRules()
