"""
요금제별 월간 토큰 한도

Pro: 5,000,000 tokens
Advanced: 1,000,000 tokens
Starter: 50,000 tokens (기본값)
"""
from typing import Dict, Optional

from core.pricing_tier import TierId, get_pricing_tier

DEFAULT_TOKEN_LIMIT = 50_000

TOKEN_LIMITS: Dict[TierId, int] = {
    TierId.PRO: 5_000_000,
    TierId.ADVANCED: 1_000_000,
    TierId.STARTER: DEFAULT_TOKEN_LIMIT,
}


def get_token_limit_from_price_id(price_id: Optional[str]) -> int:
    """가격 ID로 월간 토큰 한도를 결정. 매칭되는 요금제가 없으면 기본값."""
    tier = get_pricing_tier(price_id)
    if tier is None:
        return DEFAULT_TOKEN_LIMIT
    return TOKEN_LIMITS.get(tier.id, DEFAULT_TOKEN_LIMIT)
