"""
SwapStreet 에러 모델과 도메인 예외

REST 응답의 에러 본문은 항상 ``{"error", "message", "details", "status_code"}``
형태이며, 요청 검증 실패(422)만 ``validation_errors`` 목록이 추가됩니다.
"""

from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    status_code: int


class FieldError(BaseModel):
    """검증에 실패한 요청 필드 하나"""
    field: str
    message: str
    value: Optional[Any] = None


class ValidationErrorResponse(ErrorResponse):
    error: str = "validation_error"
    validation_errors: List[FieldError]


# =============================================================================
# 도메인 예외
# =============================================================================

class BaseCustomException(HTTPException):
    """
    표준 에러 본문을 가지는 예외의 기반 클래스

    하위 클래스는 ``status_code``, ``error``, ``default_message``만 지정합니다.
    ``message``는 WebSocket Error 이벤트의 내용으로도 그대로 쓰입니다.
    """
    status_code: int = status.HTTP_400_BAD_REQUEST
    error: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(status_code=self.status_code, detail=self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return create_error_response(self.error, self.message, self.status_code, self.details).model_dump()


class AuthenticationException(BaseCustomException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "authentication_error"
    default_message = "Authentication failed"


class AuthorizationException(BaseCustomException):
    status_code = status.HTTP_403_FORBIDDEN
    error = "authorization_error"
    default_message = "Access denied"


class ResourceNotFoundException(BaseCustomException):
    """``resource`` 이름으로 기본 메시지("<resource> not found")를 만듭니다."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "resource_not_found"

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.resource = resource
        super().__init__(message or f"{resource} not found", details or {"resource": resource})


class ConflictException(BaseCustomException):
    status_code = status.HTTP_409_CONFLICT
    error = "resource_conflict"
    default_message = "Resource conflict"


class BusinessLogicException(BaseCustomException):
    error = "business_logic_error"
    default_message = "Request violates a business rule"


# =============================================================================
# 응답 생성
# =============================================================================

def create_error_response(
    error: str,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None
) -> ErrorResponse:
    return ErrorResponse(error=error, message=message, status_code=status_code, details=details)


def create_validation_error_response(
    message: str,
    validation_errors: List[FieldError],
    status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY
) -> ValidationErrorResponse:
    return ValidationErrorResponse(message=message, validation_errors=validation_errors, status_code=status_code)


# =============================================================================
# 에러 팩토리
# =============================================================================

# 인증 / 프로필

def invalid_token_error():
    return AuthenticationException("Invalid or expired token")


def profile_not_found_error(profile_id: Optional[Any] = None):
    details = {"profile_id": str(profile_id)} if profile_id else None
    return ResourceNotFoundException("Profile", details=details)


def profile_exists_error():
    return ConflictException("Profile already exists for this user")


# 리스팅 / 위시리스트

def listing_not_found_error(listing_id: Optional[Any] = None):
    details = {"listing_id": str(listing_id)} if listing_id else None
    return ResourceNotFoundException("Listing", details=details)


def listing_owner_error():
    return AuthorizationException("You can only modify your own listings")


def wishlist_item_exists_error():
    return ConflictException("Listing is already in the wishlist")


def wishlist_item_not_found_error():
    return ResourceNotFoundException("Wishlist item")


# 채팅

def chatroom_not_found_error():
    return ResourceNotFoundException("Chatroom")


def chatroom_access_denied_error():
    return AuthorizationException("You do not have access to this chatroom")


def empty_message_error():
    return BusinessLogicException("Message content cannot be empty")
