from fastapi import FastAPI
import uvicorn
from contextlib import asynccontextmanager
import logging
from datetime import datetime

from core.config import settings
from core.factory import ServiceFactory
from core.middleware import setup_exception_handlers
from core.responses import success_response

from routers import paddle_router, public_router

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Factory 패턴으로 서비스 초기화
ServiceFactory.configure_dependencies()
webhook_processor = ServiceFactory.get_webhook_processor()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info("Paddle webhook server started (strict_verify=%s)", settings.PADDLE_WEBHOOK_STRICT_VERIFY)
    if not settings.PADDLE_WEBHOOK_SECRET:
        logger.warning("[PADDLE] PADDLE_WEBHOOK_SECRET가 설정되지 않았습니다")
    yield
    logger.info("Paddle webhook server stopped")

app = FastAPI(
    title="Paddle Billing Webhook Server",
    description="Persists Paddle billing events and refreshes monthly token limits",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG
)

# 예외 처리 미들웨어 설정
setup_exception_handlers(app)

# 웹훅 라우터 의존성 설정
paddle_router.set_dependencies(webhook_processor)

@app.get("/health")
async def health_check():
    return success_response(
        data={
            "timestamp": datetime.now().isoformat(),
            "version": "1.0.0",
            "environment": "development" if settings.DEBUG else "production"
        },
        message="헬스 체크(DB 미검사)"
    )

# 라우터 등록
app.include_router(paddle_router.router)  # Paddle 웹훅 라우터
app.include_router(public_router.router)  # 공개 API 라우터

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
