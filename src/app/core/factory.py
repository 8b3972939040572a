"""
서비스 팩토리 - 의존성 주입 설정
"""
from supabase import create_client
import logging

from core.config import settings
from core.container import container
from core.interfaces import IBillingStore
from database_helper import DatabaseHelper
from services.webhook_processor import ProcessWebhook

logger = logging.getLogger(__name__)

class ServiceFactory:
    """서비스 의존성 등록 및 초기화"""

    @staticmethod
    def configure_dependencies():
        """의존성 주입 컨테이너 설정"""
        # 저장소는 웹훅 처리마다 새 Supabase 클라이언트로 생성
        container.register_transient(IBillingStore, ServiceFactory.create_billing_store)

        processor = ProcessWebhook(store_factory=lambda: container.get(IBillingStore))
        container.register_singleton(ProcessWebhook, processor)

    @staticmethod
    def create_billing_store() -> IBillingStore:
        """service role 키로 서버 내부용 저장소 생성"""
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        return DatabaseHelper(client)

    @staticmethod
    def get_webhook_processor() -> ProcessWebhook:
        """웹훅 처리기 조회"""
        return container.get(ProcessWebhook)
