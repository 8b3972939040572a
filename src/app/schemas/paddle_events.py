"""
Paddle Billing 웹훅 이벤트 파싱

Raw webhook JSON (snake_case, camelCase fallback) is turned into typed event
records here, so handlers never deal with missing provider fields directly.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from core.responses import InvalidEventPayload

logger = logging.getLogger(__name__)


class EventName(str, Enum):
    """처리 대상 Paddle 이벤트 이름"""
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_UPDATED = "subscription.updated"
    CUSTOMER_CREATED = "customer.created"
    CUSTOMER_UPDATED = "customer.updated"
    TRANSACTION_CREATED = "transaction.created"
    TRANSACTION_UPDATED = "transaction.updated"


SUBSCRIPTION_EVENTS = {EventName.SUBSCRIPTION_CREATED, EventName.SUBSCRIPTION_UPDATED}
CUSTOMER_EVENTS = {EventName.CUSTOMER_CREATED, EventName.CUSTOMER_UPDATED}
TRANSACTION_EVENTS = {EventName.TRANSACTION_CREATED, EventName.TRANSACTION_UPDATED}


@dataclass(frozen=True, slots=True)
class SubscriptionEvent:
    event_type: EventName
    subscription_id: str
    status: str
    customer_id: str
    price_id: str = ""
    product_id: str = ""
    scheduled_change_at: Optional[str] = None
    event_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CustomerEvent:
    event_type: EventName
    customer_id: str
    email: Optional[str] = None
    event_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TransactionEvent:
    event_type: EventName
    transaction_id: str
    status: str
    customer_id: Optional[str] = None
    subscription_id: Optional[str] = None
    currency_code: Optional[str] = None
    billing_period: Optional[Dict[str, Any]] = None
    event_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UnhandledEvent:
    """처리하지 않는 이벤트 타입"""
    event_type: str
    event_id: Optional[str] = None


BillingEvent = Union[SubscriptionEvent, CustomerEvent, TransactionEvent, UnhandledEvent]


def _get(d: Any, *keys: str, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _first(d: Dict[str, Any], *paths: tuple) -> Any:
    """여러 경로 중 처음으로 값이 있는 항목 반환"""
    for path in paths:
        value = _get(d, *path)
        if value is not None:
            return value
    return None


def _require(event_type: str, fields: Dict[str, Any]) -> None:
    """필수 문자열 필드 검증 (없거나 문자열이 아니면 거부)"""
    invalid = [name for name, value in fields.items() if not value or not isinstance(value, str)]
    if invalid:
        logger.warning("[PADDLE] %s payload missing or invalid required fields: %s", event_type, invalid)
        raise InvalidEventPayload(event_type, invalid)


def _optional_str(event_type: str, name: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    logger.warning("[PADDLE] %s payload field %s has type %s", event_type, name, type(value).__name__)
    raise InvalidEventPayload(event_type, [name])


def _parse_subscription(event_type: EventName, data: Dict[str, Any], event_id: Optional[str]) -> SubscriptionEvent:
    subscription_id = data.get("id")
    customer_id = _first(data, ("customer_id",), ("customerId",))
    _require(event_type.value, {"id": subscription_id, "customer_id": customer_id})

    items = data.get("items")
    if items is None:
        items = []
    if not isinstance(items, list):
        logger.warning("[PADDLE] %s payload items is not a list: %s", event_type.value, type(items).__name__)
        raise InvalidEventPayload(event_type.value, ["items"])
    first_item = items[0] if items and isinstance(items[0], dict) else {}

    name = event_type.value
    price_id = _optional_str(name, "price_id", _first(first_item, ("price", "id"), ("price_id",), ("priceId",)))
    product_id = _optional_str(
        name,
        "product_id",
        _first(first_item, ("price", "product_id"), ("price", "productId"), ("product", "id")),
    )
    scheduled_change_at = _optional_str(
        name,
        "scheduled_change",
        _first(data, ("scheduled_change", "effective_at"), ("scheduledChange", "effectiveAt")),
    )

    return SubscriptionEvent(
        event_type=event_type,
        subscription_id=subscription_id,
        status=_optional_str(name, "status", data.get("status")) or "",
        customer_id=customer_id,
        price_id=price_id or "",
        product_id=product_id or "",
        scheduled_change_at=scheduled_change_at,
        event_id=event_id,
    )


def _parse_customer(event_type: EventName, data: Dict[str, Any], event_id: Optional[str]) -> CustomerEvent:
    customer_id = data.get("id")
    _require(event_type.value, {"id": customer_id})
    return CustomerEvent(
        event_type=event_type,
        customer_id=customer_id,
        email=_optional_str(event_type.value, "email", data.get("email")),
        event_id=event_id,
    )


def _parse_transaction(event_type: EventName, data: Dict[str, Any], event_id: Optional[str]) -> TransactionEvent:
    transaction_id = data.get("id")
    _require(event_type.value, {"id": transaction_id})

    billing_period = _first(data, ("billing_period",), ("billingPeriod",))
    if billing_period is not None and not isinstance(billing_period, dict):
        logger.warning("[PADDLE] unsupported billing_period type: %s", type(billing_period))
        billing_period = None

    name = event_type.value
    return TransactionEvent(
        event_type=event_type,
        transaction_id=transaction_id,
        status=_optional_str(name, "status", data.get("status")) or "",
        customer_id=_optional_str(name, "customer_id", _first(data, ("customer_id",), ("customerId",))),
        subscription_id=_optional_str(
            name, "subscription_id", _first(data, ("subscription_id",), ("subscriptionId",))
        ),
        currency_code=_optional_str(name, "currency_code", _first(data, ("currency_code",), ("currencyCode",))),
        billing_period=billing_period,
        event_id=event_id,
    )


def parse_billing_event(payload: Dict[str, Any]) -> BillingEvent:
    """웹훅 페이로드를 타입이 지정된 이벤트로 변환"""

    raw_type: str = payload.get("event_type") or payload.get("eventType") or ""
    event_id: Optional[str] = (
        payload.get("event_id")
        or payload.get("eventId")
        or payload.get("notification_id")
    )
    data = payload.get("data")
    if not isinstance(data, dict):
        data = {}

    normalized = str(raw_type).strip().lower()
    try:
        event_type = EventName(normalized)
    except ValueError:
        return UnhandledEvent(event_type=raw_type, event_id=event_id)

    if event_type in SUBSCRIPTION_EVENTS:
        return _parse_subscription(event_type, data, event_id)
    if event_type in CUSTOMER_EVENTS:
        return _parse_customer(event_type, data, event_id)
    return _parse_transaction(event_type, data, event_id)
