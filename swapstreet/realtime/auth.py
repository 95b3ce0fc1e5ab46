from typing import Optional
from uuid import UUID

from fastapi import WebSocket, status

from swapstreet.core.logging import get_logger
from swapstreet.utils.auth import get_user_id_from_token

logger = get_logger(__name__)


def extract_websocket_token(websocket: WebSocket) -> Optional[str]:
    """Authorization 헤더(Bearer) 또는 access_token 쿼리 파라미터에서 토큰 추출"""
    authorization = websocket.headers.get("authorization")
    if authorization:
        if not authorization.startswith("Bearer "):
            return None
        return authorization[len("Bearer "):].strip() or None

    return websocket.query_params.get("access_token") or None


async def authenticate_websocket(websocket: WebSocket) -> Optional[UUID]:
    """
    WebSocket 연결에서 JWT 토큰을 검증하고 사용자(프로필) ID를 반환합니다.

    인증 실패 시 정책 위반(1008)으로 연결을 닫고 None을 반환합니다.
    """
    token = extract_websocket_token(websocket)
    if not token:
        logger.warning("No access token provided for WebSocket connection")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return None

    user_id = get_user_id_from_token(token)
    if user_id is None:
        logger.warning("Invalid token provided for WebSocket connection")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return None

    logger.info(f"WebSocket authentication successful for user: {user_id}")
    return user_id
