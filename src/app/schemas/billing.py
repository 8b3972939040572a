"""
Supabase 테이블에 upsert 되는 레코드 스키마
"""
from pydantic import BaseModel, Field
from typing import Optional


class SubscriptionRecord(BaseModel):
    """subscriptions 테이블 행 (키: subscription_id)"""
    subscription_id: str = Field(..., description="Paddle 구독 ID")
    subscription_status: str = Field(..., description="구독 상태")
    price_id: str = Field("", description="첫 번째 항목의 가격 ID")
    product_id: str = Field("", description="첫 번째 항목의 상품 ID")
    scheduled_change: Optional[str] = Field(None, description="예약 변경 적용 시각 (ISO 8601)")
    customer_id: str = Field(..., description="Paddle 고객 ID")


class CustomerRecord(BaseModel):
    """customers 테이블 행 (키: customer_id)"""
    customer_id: str
    email: Optional[str] = None


class TransactionRecord(BaseModel):
    """transactions 테이블 행 (키: transaction_id)"""
    transaction_id: str
    user_id: Optional[str] = Field(None, description="고객 이메일로 찾은 사용자 ID")
    customer_id: Optional[str] = None
    subscription_id: Optional[str] = None
    status: str
    currency_code: Optional[str] = None
    billing_period: Optional[str] = Field(None, description="JSON 직렬화된 청구 기간")


class TokenUsageRecord(BaseModel):
    """token_usage 테이블 행 (키: user_id + month)"""
    user_id: str
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="YYYY-MM")
    token_limit: int
    last_reset_at: str = Field(..., description="한도 갱신 시각 (ISO 8601)")
