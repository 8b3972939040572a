"""
서비스 인터페이스 정의
"""
from abc import ABC, abstractmethod
from typing import Optional

from schemas.billing import CustomerRecord, SubscriptionRecord, TokenUsageRecord, TransactionRecord


class IBillingStore(ABC):
    """결제 데이터 저장소 인터페이스

    upsert 계열은 실패 시 StoreWriteError 를 발생시키고,
    조회 계열은 찾지 못하거나 실패하면 None 을 반환한다.
    """

    @abstractmethod
    async def upsert_subscription(self, record: SubscriptionRecord) -> None:
        """구독 upsert (subscription_id 기준)"""
        pass

    @abstractmethod
    async def upsert_customer(self, record: CustomerRecord) -> None:
        """고객 upsert (customer_id 기준)"""
        pass

    @abstractmethod
    async def upsert_transaction(self, record: TransactionRecord) -> None:
        """거래 upsert (transaction_id 기준)"""
        pass

    @abstractmethod
    async def upsert_token_usage(self, record: TokenUsageRecord) -> None:
        """월별 토큰 한도 upsert (user_id, month 기준)"""
        pass

    @abstractmethod
    async def get_customer_email(self, customer_id: Optional[str]) -> Optional[str]:
        """고객 ID로 이메일 조회"""
        pass

    @abstractmethod
    async def get_user_id_from_email(self, email: str) -> Optional[str]:
        """이메일로 사용자 ID 조회 (DB 함수 호출)"""
        pass

    async def close(self) -> None:
        """세션 자원 정리"""
        return None
