from datetime import timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from swapstreet.core.config import settings
from swapstreet.utils.time_utils import utc_now


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """JWT 토큰 디코드. 유효하지 않으면 None"""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def get_user_id_from_token(token: Optional[str]) -> Optional[UUID]:
    """토큰의 sub 클레임에서 사용자(프로필) ID 추출"""
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        return UUID(str(subject))
    except ValueError:
        return None
