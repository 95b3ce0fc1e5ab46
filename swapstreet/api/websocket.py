from uuid import uuid4

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from swapstreet.api.dependencies import get_chat_hub
from swapstreet.core.logging import get_logger, log_websocket_event
from swapstreet.realtime.auth import authenticate_websocket
from swapstreet.realtime.connection_manager import manager
from swapstreet.realtime.hub import ERROR, ChatHub

logger = get_logger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid message format"
PROCESSING_FAILED_MESSAGE = "An error occurred while processing the message"

router = APIRouter(prefix="/ws", tags=["WebSocket"])


@router.websocket("/chat")
async def chat_websocket(
    websocket: WebSocket,
    hub: ChatHub = Depends(get_chat_hub)
):
    """
    채팅 WebSocket 엔드포인트

    연결 후 JoinChatroom / LeaveChatroom / SendMessage 프레임을 받아
    ChatHub로 전달합니다.
    """
    # 1. 인증 (실패 시 1008로 종료)
    user_id = await authenticate_websocket(websocket)
    if user_id is None:
        return

    # 2. 연결 등록
    connection_id = str(uuid4())
    await manager.connect(websocket, connection_id)
    log_websocket_event(logger, "connect", str(user_id), None, connection_id=connection_id)

    # 3. 메시지 수신 루프
    try:
        while True:
            try:
                payload = await websocket.receive_json()
            except (ValueError, KeyError):
                # 잘못된 JSON 또는 텍스트가 아닌(binary) 프레임
                logger.warning(f"Unreadable frame from user {user_id} (connection {connection_id})")
                await manager.send_to_connection(connection_id, ERROR, INVALID_FORMAT_MESSAGE)
                continue

            try:
                await hub.dispatch(connection_id, user_id, payload)
            except Exception:
                logger.exception(f"Error processing message from user {user_id} (connection {connection_id})")
                await manager.send_to_connection(connection_id, ERROR, PROCESSING_FAILED_MESSAGE)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for user {user_id} (connection {connection_id})")

    finally:
        # 4. 모든 그룹에서 제거
        await hub.on_disconnected(connection_id)
        log_websocket_event(logger, "disconnect", str(user_id), None, connection_id=connection_id)
