"""서비스 계층 오류 + FastAPI 예외 핸들러"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from business_store import RecordNotFound

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


class ServiceError(Exception):
    """호출자에게 보이는 유일한 오류 타입: HTTP 상태 코드 + 메시지."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @classmethod
    def not_found(cls, message: str) -> ServiceError:
        return cls(404, message)

    @classmethod
    def conflict(cls, message: str) -> ServiceError:
        return cls(409, message)

    @classmethod
    def internal(cls) -> ServiceError:
        return cls(500, INTERNAL_ERROR_MESSAGE)


@contextmanager
def translate_errors(action: str):
    """
    저장소 / 인덱스 오류 → ServiceError.

        RecordNotFound  → 404
        IntegrityError  → 409
        그 밖의 Exception → 500 (상세 내용은 서버 로그에만)
    """
    try:
        yield
    except ServiceError:
        raise
    except RecordNotFound as e:
        raise ServiceError.not_found(str(e)) from e
    except IntegrityError as e:
        logger.warning(f"{action} 제약 조건 위반: {e.orig}")
        raise ServiceError.conflict(f"{action}: duplicate or conflicting record") from e
    except Exception as e:
        logger.exception(f"{action} 실패")
        raise ServiceError.internal() from e


def error_body(status_code: int, message: str) -> dict:
    return {"message": message, "code": status_code}


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"처리되지 않은 오류: {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body(500, INTERNAL_ERROR_MESSAGE))


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
