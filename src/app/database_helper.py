"""
Supabase 기반 결제 데이터 저장소
"""

from typing import Any, Dict, Optional
from supabase import Client
import logging

from core.interfaces import IBillingStore
from core.responses import StoreWriteError
from schemas.billing import CustomerRecord, SubscriptionRecord, TokenUsageRecord, TransactionRecord

logger = logging.getLogger(__name__)


class DatabaseHelper(IBillingStore):
    def __init__(self, supabase_client: Client):
        self.supabase = supabase_client

    def _upsert(self, table: str, row: Dict[str, Any], on_conflict: str) -> None:
        try:
            self.supabase.table(table).upsert(row, on_conflict=on_conflict).execute()
        except Exception as e:
            logger.error(f"{table} upsert 실패: {e}")
            raise StoreWriteError(table) from e

    async def upsert_subscription(self, record: SubscriptionRecord) -> None:
        self._upsert('subscriptions', record.model_dump(), on_conflict='subscription_id')

    async def upsert_customer(self, record: CustomerRecord) -> None:
        self._upsert('customers', record.model_dump(), on_conflict='customer_id')

    async def upsert_transaction(self, record: TransactionRecord) -> None:
        self._upsert('transactions', record.model_dump(), on_conflict='transaction_id')

    async def upsert_token_usage(self, record: TokenUsageRecord) -> None:
        self._upsert('token_usage', record.model_dump(), on_conflict='user_id,month')

    async def get_customer_email(self, customer_id: Optional[str]) -> Optional[str]:
        """고객 ID로 이메일 조회"""
        if not customer_id:
            return None
        try:
            result = (
                self.supabase.table('customers')
                .select('email')
                .eq('customer_id', customer_id)
                .limit(1)
                .execute()
            )
            if result.data:
                return result.data[0].get('email')
            return None
        except Exception as e:
            logger.error(f"고객 조회 실패 ({customer_id}): {e}")
            return None

    async def get_user_id_from_email(self, email: str) -> Optional[str]:
        """get_user_id_from_email DB 함수로 사용자 ID 조회"""
        if not email:
            return None
        try:
            result = self.supabase.rpc('get_user_id_from_email', {'user_email': email}).execute()
            user_id = result.data if hasattr(result, 'data') else None
            return str(user_id) if user_id else None
        except Exception as e:
            logger.error(f"이메일로 사용자 ID 조회 실패: {e}")
            return None

    async def close(self) -> None:
        """PostgREST HTTP 세션 정리"""
        try:
            session = getattr(self.supabase.postgrest, 'session', None)
            if session is not None:
                session.close()
        except Exception as e:
            logger.warning(f"Supabase 세션 정리 실패: {e}")
