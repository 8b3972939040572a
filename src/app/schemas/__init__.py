from .billing import CustomerRecord, SubscriptionRecord, TokenUsageRecord, TransactionRecord
from .paddle_events import (
    BillingEvent,
    CustomerEvent,
    EventName,
    SubscriptionEvent,
    TransactionEvent,
    UnhandledEvent,
    parse_billing_event,
)

__all__ = [
    "BillingEvent",
    "CustomerEvent",
    "CustomerRecord",
    "EventName",
    "SubscriptionEvent",
    "SubscriptionRecord",
    "TokenUsageRecord",
    "TransactionEvent",
    "TransactionRecord",
    "UnhandledEvent",
    "parse_billing_event",
]
