import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.grading.errors import GradingError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or {}), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    # ✅ 성적 집계 도메인 오류 (설정 오류, 채점 미완료, 등급 구간 없음 등)
    @app.exception_handler(GradingError)
    async def grading_exception_handler(request: Request, exc: GradingError):
        logger.warning(f"{exc.error_code} {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.http_status, exc.error_code, exc.message, exc.details)

    # ✅ 처리되지 않은 예외는 500으로 통일
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "INTERNAL_ERROR", str(exc))
