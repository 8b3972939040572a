"""요금제 카탈로그 / 토큰 한도 테스트"""
from dataclasses import FrozenInstanceError

import pytest

from core.pricing_tier import PRICING_TIERS, BillingInterval, TierId, get_pricing_tier
from core.token_limit import DEFAULT_TOKEN_LIMIT, get_token_limit_from_price_id


def _tier(tier_id: TierId):
    return next(tier for tier in PRICING_TIERS if tier.id == tier_id)


@pytest.mark.parametrize("interval", [BillingInterval.MONTH, BillingInterval.YEAR])
def test_pro_price_ids_map_to_pro_limit(interval):
    price_id = _tier(TierId.PRO).price_id[interval]
    assert get_token_limit_from_price_id(price_id) == 5_000_000


@pytest.mark.parametrize("interval", [BillingInterval.MONTH, BillingInterval.YEAR])
def test_advanced_price_ids_map_to_advanced_limit(interval):
    price_id = _tier(TierId.ADVANCED).price_id[interval]
    assert get_token_limit_from_price_id(price_id) == 1_000_000


def test_starter_price_id_gets_default_limit():
    price_id = _tier(TierId.STARTER).price_id[BillingInterval.MONTH]
    assert get_token_limit_from_price_id(price_id) == 50_000


@pytest.mark.parametrize("price_id", [None, "", "pri_unknown", "not even a price id"])
def test_unknown_or_missing_price_id_falls_back_to_default(price_id):
    assert get_token_limit_from_price_id(price_id) == DEFAULT_TOKEN_LIMIT == 50_000


def test_get_pricing_tier_matches_either_interval():
    pro = _tier(TierId.PRO)
    assert get_pricing_tier(pro.price_id[BillingInterval.MONTH]) is pro
    assert get_pricing_tier(pro.price_id[BillingInterval.YEAR]) is pro
    assert get_pricing_tier("pri_unknown") is None


def test_catalog_is_read_only():
    tier = PRICING_TIERS[0]
    with pytest.raises(FrozenInstanceError):
        tier.name = "changed"  # type: ignore[misc]
    with pytest.raises(TypeError):
        tier.price_id[BillingInterval.MONTH] = "pri_other"  # type: ignore[index]


def test_to_dict_uses_plain_values():
    payload = _tier(TierId.PRO).to_dict()
    assert payload["id"] == "pro"
    assert payload["featured"] is True
    assert set(payload["price_id"].keys()) == {"month", "year"}
