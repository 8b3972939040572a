"""Public endpoints for client-side configuration (no auth required)."""
from typing import Any, Dict, List

from fastapi import APIRouter

from core.pricing_tier import PRICING_TIERS
from core.responses import success_response
from core.token_limit import TOKEN_LIMITS

router = APIRouter(prefix="/api/v1/public", tags=["public"])


def _format_pricing_tiers() -> List[Dict[str, Any]]:
    tiers = []
    for tier in PRICING_TIERS:
        payload = tier.to_dict()
        payload["token_limit"] = TOKEN_LIMITS[tier.id]
        tiers.append(payload)
    return tiers


@router.get("/pricing-tiers")
async def get_pricing_tiers():
    return success_response(data={"tiers": _format_pricing_tiers()}, message="Pricing tiers loaded")
