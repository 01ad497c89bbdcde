import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from utils.exceptions import RecordError

logger = logging.getLogger(__name__)

# 분류된 오류 종류 → HTTP 상태 코드
STATUS_BY_KIND = {
    "NOT_FOUND": 404,
    "BUSINESS_RULE": 400,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 403,
}


def _error_body(code: str, message: str, offending_id=None):
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, offending_id=offending_id))
    return body.model_dump(mode="json")


def add_error_handlers(app: FastAPI):
    @app.exception_handler(RecordError)
    async def record_error_handler(request: Request, exc: RecordError):
        status_code = STATUS_BY_KIND.get(exc.kind, 500)
        return JSONResponse(
            status_code=status_code,
            content=_error_body(exc.kind, exc.message, exc.offending_id),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return JSONResponse(status_code=400, content=_error_body("BAD_REQUEST", messages))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"처리되지 않은 오류: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "서버 내부 오류가 발생했습니다."),
        )
