"""Paddle 웹훅 이벤트 처리기

Dispatches a parsed billing event to the subscription, customer or
transaction handler. Each handler works inside its own store session.
Store write failures propagate to the caller; lookup misses only skip the
dependent side effect (quota refresh, transaction insert).
"""
from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable, Dict

from core.interfaces import IBillingStore
from core.token_limit import get_token_limit_from_price_id
from schemas.billing import CustomerRecord, SubscriptionRecord, TokenUsageRecord, TransactionRecord
from schemas.paddle_events import (
    CUSTOMER_EVENTS,
    SUBSCRIPTION_EVENTS,
    TRANSACTION_EVENTS,
    BillingEvent,
    CustomerEvent,
    SubscriptionEvent,
    TransactionEvent,
)


logger = logging.getLogger(__name__)

StoreFactory = Callable[[], IBillingStore]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessWebhook:
    """결제 이벤트를 저장소에 반영"""

    def __init__(self, store_factory: StoreFactory, clock: Clock = _utc_now) -> None:
        self._store_factory = store_factory
        self._clock = clock
        self._handlers: Dict[str, Callable[[BillingEvent], Awaitable[None]]] = {
            **{name.value: self._update_subscription_data for name in SUBSCRIPTION_EVENTS},
            **{name.value: self._update_customer_data for name in CUSTOMER_EVENTS},
            **{name.value: self._update_transaction_data for name in TRANSACTION_EVENTS},
        }

    async def process_event(self, event: BillingEvent) -> bool:
        """이벤트 처리. 처리 대상이 아니면 아무 작업 없이 False 반환."""

        event_type = getattr(event.event_type, "value", event.event_type)
        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info("[PADDLE] event ignored: type=%s event_id=%s", event_type, event.event_id)
            return False

        logger.info("[PADDLE] processing event: type=%s event_id=%s", event_type, event.event_id)
        await handler(event)
        return True

    @asynccontextmanager
    async def _store_session(self) -> AsyncIterator[IBillingStore]:
        store = self._store_factory()
        try:
            yield store
        finally:
            await store.close()

    async def _update_subscription_data(self, event: SubscriptionEvent) -> None:
        async with self._store_session() as store:
            await store.upsert_subscription(
                SubscriptionRecord(
                    subscription_id=event.subscription_id,
                    subscription_status=event.status,
                    price_id=event.price_id,
                    product_id=event.product_id,
                    scheduled_change=event.scheduled_change_at,
                    customer_id=event.customer_id,
                )
            )

            await self._update_token_limit_for_customer(store, event.customer_id, event.price_id)

    async def _update_customer_data(self, event: CustomerEvent) -> None:
        async with self._store_session() as store:
            await store.upsert_customer(
                CustomerRecord(customer_id=event.customer_id, email=event.email)
            )

    async def _update_transaction_data(self, event: TransactionEvent) -> None:
        async with self._store_session() as store:
            email = await store.get_customer_email(event.customer_id)
            if not email:
                logger.error(
                    "[PADDLE] customer not found for transaction: tx_id=%s customer_id=%s",
                    event.transaction_id,
                    event.customer_id,
                )
                return

            user_id = await store.get_user_id_from_email(email)
            if not user_id:
                logger.error(
                    "[PADDLE] user_id not resolved for transaction: tx_id=%s customer_id=%s",
                    event.transaction_id,
                    event.customer_id,
                )

            record = TransactionRecord(
                transaction_id=event.transaction_id,
                user_id=user_id,
                customer_id=event.customer_id,
                subscription_id=event.subscription_id,
                status=event.status,
                currency_code=event.currency_code,
                billing_period=json.dumps(event.billing_period) if event.billing_period is not None else None,
            )
            try:
                await store.upsert_transaction(record)
            except Exception as e:
                logger.error("[PADDLE] storing transaction failed: tx_id=%s error=%s", event.transaction_id, e)
                raise

    async def _update_token_limit_for_customer(
        self,
        store: IBillingStore,
        customer_id: str,
        price_id: str,
    ) -> None:
        """고객의 이번 달 토큰 한도를 구독 가격 기준으로 덮어쓴다"""

        email = await store.get_customer_email(customer_id)
        if not email:
            logger.error("[PADDLE] customer not found for token limit update: customer_id=%s", customer_id)
            return

        user_id = await store.get_user_id_from_email(email)
        if not user_id:
            logger.error("[PADDLE] user_id not resolved for token limit: customer_id=%s", customer_id)
            return

        now = self._clock()
        record = TokenUsageRecord(
            user_id=user_id,
            month=now.strftime("%Y-%m"),
            token_limit=get_token_limit_from_price_id(price_id),
            last_reset_at=now.isoformat(),
        )
        try:
            await store.upsert_token_usage(record)
        except Exception as e:
            logger.error("[PADDLE] updating token limit failed: user_id=%s error=%s", user_id, e)
            raise

        logger.info(
            "[PADDLE] token limit updated: user_id=%s month=%s limit=%s",
            user_id,
            record.month,
            record.token_limit,
        )
