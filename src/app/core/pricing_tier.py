"""
요금제(티어) 카탈로그

Paddle 가격 ID와 매칭되는 정적 요금제 목록. 프로세스 시작 시 한 번 만들어지고
이후 변경되지 않는다.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class TierId(str, Enum):
    """요금제 식별자"""
    STARTER = "starter"
    PRO = "pro"
    ADVANCED = "advanced"


class BillingInterval(str, Enum):
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class PricingTier:
    """요금제 정의"""
    name: str
    id: TierId
    description: str
    features: Tuple[str, ...]
    featured: bool
    price_id: Mapping[BillingInterval, str]

    def matches(self, price_id: str) -> bool:
        """월간 또는 연간 가격 ID 중 하나와 일치하는지 확인"""
        return price_id in self.price_id.values()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id.value,
            "description": self.description,
            "features": list(self.features),
            "featured": self.featured,
            "price_id": {interval.value: pid for interval, pid in self.price_id.items()},
        }


def _price_ids(month: str, year: str) -> Mapping[BillingInterval, str]:
    return MappingProxyType({BillingInterval.MONTH: month, BillingInterval.YEAR: year})


PRICING_TIERS: Tuple[PricingTier, ...] = (
    PricingTier(
        name="Starter",
        id=TierId.STARTER,
        description="Ideal for individuals who want to get started with simple design tasks.",
        features=("Deep Insight", "Access Javascript and Python", "Chat Tutoring"),
        featured=False,
        price_id=_price_ids("pri_01hsxyh9txq4rzbrhbyngkhy46", "pri_01hsxyh9txq4rzbrhbyngkhy46"),
    ),
    PricingTier(
        name="Pro",
        id=TierId.PRO,
        description="Enhanced design tools for scaling teams who need more flexibility.",
        features=(
            "Access all language",
            "Voice tutoring",
            "Journey",
            "Share projects",
            "Everything in Starter",
            "5000000",
        ),
        featured=True,
        price_id=_price_ids("pri_01kcdrdmyams9kk94qypmzds7m", "pri_01kcdrtdy74pj77ejrwmd90hqs"),
    ),
    PricingTier(
        name="Advanced",
        id=TierId.ADVANCED,
        description="Powerful tools designed for extensive collaboration and customization.",
        features=("1000000 tokens", "Everything in Pro"),
        featured=False,
        price_id=_price_ids("pri_01kcdrjkt176fqaypy6w6637hk", "pri_01kcdrqxhbxphw2x4ajmzmy61r"),
    ),
)


def get_pricing_tier(price_id: Optional[str]) -> Optional[PricingTier]:
    """가격 ID에 해당하는 요금제 조회 (없으면 None)"""
    if not price_id:
        return None
    for tier in PRICING_TIERS:
        if tier.matches(price_id):
            return tier
    return None
