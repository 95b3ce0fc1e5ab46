from typing import Callable

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from starlette.middleware.base import BaseHTTPMiddleware

from swapstreet.core.config import settings
from swapstreet.core.errors import (
    BaseCustomException,
    FieldError,
    create_error_response,
    create_validation_error_response
)
from swapstreet.core.logging import get_logger

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    통합 에러 처리 미들웨어

    라우터에서 처리되지 않은 예외를 표준화된 에러 응답으로 변환합니다.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except BaseCustomException as e:
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        except IntegrityError as e:
            # 데이터베이스 무결성 제약 조건 위반
            logger.warning(f"Integrity error on {request.method} {request.url.path}: {e.orig}")
            error_response = create_error_response(
                "database_constraint",
                "Database constraint violation",
                status.HTTP_409_CONFLICT,
                {"detail": str(e.orig)} if settings.debug else None
            )
            return JSONResponse(
                status_code=error_response.status_code,
                content=error_response.model_dump()
            )

        except (OperationalError, DBAPIError) as e:
            # PostgreSQL 연결/작업 에러
            logger.error(f"Database error: {type(e).__name__}", exc_info=True)
            error_response = create_error_response(
                "database_error",
                "Database connection or operation failed",
                status.HTTP_503_SERVICE_UNAVAILABLE,
                {"detail": str(e.orig)} if settings.debug else None
            )
            return JSONResponse(
                status_code=error_response.status_code,
                content=error_response.model_dump()
            )

        except Exception as e:
            # 예상하지 못한 모든 에러들
            logger.exception(f"Unhandled exception: {type(e).__name__}")
            error_response = create_error_response(
                "internal_server_error",
                "An unexpected error occurred",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"exception": str(e), "type": type(e).__name__} if settings.debug else None
            )
            return JSONResponse(
                status_code=error_response.status_code,
                content=error_response.model_dump()
            )


def create_http_exception_handler():
    """FastAPI HTTPException 핸들러 생성"""
    async def http_exception_handler(request: Request, exc):
        """HTTPException을 표준 형식으로 변환"""

        if isinstance(exc, BaseCustomException):
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        error_response = create_error_response(
            "http_error",
            exc.detail if isinstance(exc.detail, str) else "HTTP error occurred",
            exc.status_code,
            {"detail": exc.detail} if not isinstance(exc.detail, str) else None
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(),
            headers=getattr(exc, "headers", None)
        )

    return http_exception_handler


def create_validation_exception_handler():
    """요청 검증 에러 핸들러 생성"""
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        validation_errors = [
            FieldError(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
                value=error.get("input")
            )
            for error in exc.errors()
        ]

        error_response = create_validation_error_response(
            "Request validation failed",
            validation_errors
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder(error_response.model_dump())
        )

    return validation_exception_handler
