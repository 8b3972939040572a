"""웹훅 페이로드 파싱 테스트"""
import pytest

from core.responses import InvalidEventPayload
from schemas.paddle_events import (
    CustomerEvent,
    EventName,
    SubscriptionEvent,
    TransactionEvent,
    UnhandledEvent,
    parse_billing_event,
)


def test_subscription_payload_takes_first_item():
    payload = {
        "event_id": "evt_1",
        "event_type": "subscription.created",
        "data": {
            "id": "sub_1",
            "status": "active",
            "customer_id": "ctm_1",
            "scheduled_change": {"action": "cancel", "effective_at": "2026-11-01T00:00:00Z"},
            "items": [
                {"price": {"id": "pri_a", "product_id": "pro_a"}},
                {"price": {"id": "pri_b", "product_id": "pro_b"}},
            ],
        },
    }

    event = parse_billing_event(payload)

    assert isinstance(event, SubscriptionEvent)
    assert event.event_type is EventName.SUBSCRIPTION_CREATED
    assert event.event_id == "evt_1"
    assert event.price_id == "pri_a"
    assert event.product_id == "pro_a"
    assert event.scheduled_change_at == "2026-11-01T00:00:00Z"


def test_subscription_without_items_uses_empty_ids():
    event = parse_billing_event(
        {
            "event_type": "subscription.updated",
            "data": {"id": "sub_1", "status": "past_due", "customer_id": "ctm_1", "scheduled_change": None},
        }
    )

    assert isinstance(event, SubscriptionEvent)
    assert event.price_id == ""
    assert event.product_id == ""
    assert event.scheduled_change_at is None


def test_camel_case_payload_is_accepted():
    event = parse_billing_event(
        {
            "eventType": "subscription.updated",
            "eventId": "evt_2",
            "data": {
                "id": "sub_2",
                "status": "active",
                "customerId": "ctm_2",
                "items": [{"price": {"id": "pri_c", "productId": "pro_c"}}],
                "scheduledChange": {"effectiveAt": "2026-12-01T00:00:00Z"},
            },
        }
    )

    assert isinstance(event, SubscriptionEvent)
    assert event.customer_id == "ctm_2"
    assert event.product_id == "pro_c"
    assert event.scheduled_change_at == "2026-12-01T00:00:00Z"


def test_customer_payload():
    event = parse_billing_event(
        {"event_type": "customer.updated", "data": {"id": "ctm_1", "email": "a@example.com"}}
    )

    assert event == CustomerEvent(
        event_type=EventName.CUSTOMER_UPDATED,
        customer_id="ctm_1",
        email="a@example.com",
    )


def test_transaction_payload_keeps_optional_fields():
    event = parse_billing_event(
        {
            "event_type": "transaction.created",
            "notification_id": "ntf_1",
            "data": {
                "id": "txn_1",
                "status": "billed",
                "customer_id": None,
                "currency_code": "USD",
                "billing_period": {"starts_at": "2026-10-01", "ends_at": "2026-11-01"},
            },
        }
    )

    assert isinstance(event, TransactionEvent)
    assert event.event_id == "ntf_1"
    assert event.customer_id is None
    assert event.subscription_id is None
    assert event.currency_code == "USD"
    assert event.billing_period == {"starts_at": "2026-10-01", "ends_at": "2026-11-01"}


@pytest.mark.parametrize("event_type", ["transaction.completed", "payment_method.created", "", None])
def test_unknown_event_types_are_unhandled(event_type):
    event = parse_billing_event({"event_type": event_type, "data": {"id": "x"}})
    assert isinstance(event, UnhandledEvent)


def test_missing_subscription_id_is_rejected():
    with pytest.raises(InvalidEventPayload) as excinfo:
        parse_billing_event({"event_type": "subscription.created", "data": {"customer_id": "ctm_1"}})

    assert excinfo.value.status_code == 422
    assert excinfo.value.errors == ["id"]


def test_non_string_id_is_rejected():
    with pytest.raises(InvalidEventPayload) as excinfo:
        parse_billing_event({"event_type": "customer.created", "data": {"id": 12345}})

    assert excinfo.value.status_code == 422
    assert excinfo.value.errors == ["id"]


def test_subscription_items_must_be_a_list():
    payload = {
        "event_type": "subscription.created",
        "data": {"id": "sub_1", "customer_id": "ctm_1", "items": {"price": {"id": "pri_1"}}},
    }

    with pytest.raises(InvalidEventPayload) as excinfo:
        parse_billing_event(payload)

    assert excinfo.value.errors == ["items"]


def test_transaction_currency_must_be_a_string():
    payload = {
        "event_type": "transaction.updated",
        "data": {"id": "txn_1", "status": "paid", "currency_code": 840},
    }

    with pytest.raises(InvalidEventPayload) as excinfo:
        parse_billing_event(payload)

    assert excinfo.value.errors == ["currency_code"]
