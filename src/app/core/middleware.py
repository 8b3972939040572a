"""
전역 예외 처리 미들웨어

웹훅 처리 중 전파된 예외를 표준 오류 응답으로 변환한다.
저장소 기록 실패는 5xx 로 응답해 Paddle 이 이벤트를 재전송하도록 한다.
"""
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
import logging

from core.responses import error_response, BusinessException, StoreWriteError

logger = logging.getLogger(__name__)


def _error_json(status_code: int, message: str, error_code: str, data=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(message=message, error_code=error_code, data=data).model_dump(),
    )


async def store_write_exception_handler(request: Request, exc: StoreWriteError):
    """저장소 기록 실패 처리기"""
    logger.error(
        "[PADDLE] store write failed: path=%s service=%s table=%s cause=%s",
        request.url.path,
        exc.service_name,
        exc.table,
        exc.__cause__,
    )
    return _error_json(exc.status_code, exc.message, exc.error_code, data={"table": exc.table})


async def business_exception_handler(request: Request, exc: BusinessException):
    """비즈니스 예외 처리기"""
    logger.warning("Business exception on %s: %s", request.url.path, exc.message)
    errors = getattr(exc, "errors", None)
    return _error_json(exc.status_code, exc.message, exc.error_code, data={"errors": errors} if errors else None)


async def http_exception_handler_custom(request: Request, exc: HTTPException):
    """HTTP 예외 처리기"""
    logger.warning("HTTP exception on %s: %s", request.url.path, exc.detail)
    return _error_json(exc.status_code, str(exc.detail), "HTTP_ERROR")


async def general_exception_handler(request: Request, exc: Exception):
    """일반 예외 처리기"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return _error_json(500, "내부 서버 오류가 발생했습니다", "INTERNAL_SERVER_ERROR")


def setup_exception_handlers(app):
    """예외 처리기 설정"""
    app.add_exception_handler(StoreWriteError, store_write_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler_custom)
    app.add_exception_handler(Exception, general_exception_handler)
