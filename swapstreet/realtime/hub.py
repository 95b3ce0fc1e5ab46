"""
Chat hub: authorization-gated chatroom groups over a MessageRouter.

Client actions: JoinChatroom, LeaveChatroom, SendMessage (plus ping).
Server events: JoinedChatroom, LeftChatroom, ReceiveMessage, Error (plus pong).
"""

from typing import Any, Dict, Optional
from uuid import UUID

from swapstreet.core.errors import BaseCustomException
from swapstreet.core.logging import get_logger, log_websocket_event, log_security_event
from swapstreet.realtime.backend import ChatBackend
from swapstreet.realtime.router import MessageRouter
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)

# Server -> client events
JOINED_CHATROOM = "JoinedChatroom"
LEFT_CHATROOM = "LeftChatroom"
RECEIVE_MESSAGE = "ReceiveMessage"
ERROR = "Error"
PONG = "pong"

ACCESS_DENIED_MESSAGE = "You do not have access to this chatroom"
EMPTY_MESSAGE = "Message content cannot be empty"
JOIN_FAILED_MESSAGE = "An error occurred while joining the chatroom"
LEAVE_FAILED_MESSAGE = "An error occurred while leaving the chatroom"
SEND_FAILED_MESSAGE = "An error occurred while sending the message"


class ChatHub:

    def __init__(self, router: MessageRouter, backend: ChatBackend):
        self.router = router
        self.backend = backend

    @staticmethod
    def group_name(chatroom_id: UUID) -> str:
        return f"chatroom-{chatroom_id}"

    async def join_chatroom(self, connection_id: str, user_id: UUID, chatroom_id: UUID) -> None:
        """참여자 확인 후 연결을 채팅방 그룹에 추가합니다."""
        try:
            if not await self.backend.user_belongs_to_chatroom(user_id, chatroom_id):
                log_security_event(
                    logger, "chatroom_join_denied", severity="low",
                    user_id=str(user_id), chatroom_id=str(chatroom_id)
                )
                await self.router.send_to_connection(connection_id, ERROR, ACCESS_DENIED_MESSAGE)
                return

            await self.router.add_to_group(connection_id, self.group_name(chatroom_id))
            await self.router.send_to_connection(connection_id, JOINED_CHATROOM, chatroom_id)
            log_websocket_event(logger, "join", str(user_id), str(chatroom_id), connection_id=connection_id)

        except Exception:
            logger.exception(f"Error joining chatroom {chatroom_id} for user {user_id}")
            await self.router.send_to_connection(connection_id, ERROR, JOIN_FAILED_MESSAGE)

    async def leave_chatroom(self, connection_id: str, chatroom_id: UUID) -> None:
        """연결을 채팅방 그룹에서 제거합니다 (권한 확인 없음)."""
        try:
            await self.router.remove_from_group(connection_id, self.group_name(chatroom_id))
            await self.router.send_to_connection(connection_id, LEFT_CHATROOM, chatroom_id)
            log_websocket_event(logger, "leave", None, str(chatroom_id), connection_id=connection_id)

        except Exception:
            logger.exception(f"Error leaving chatroom {chatroom_id} for connection {connection_id}")
            await self.router.send_to_connection(connection_id, ERROR, LEAVE_FAILED_MESSAGE)

    async def send_message(
        self,
        connection_id: str,
        user_id: UUID,
        chatroom_id: UUID,
        content: Optional[str]
    ) -> None:
        """
        메시지를 저장하고 채팅방 그룹 전체(보낸 사람 포함)에 브로드캐스트합니다.

        그룹 가입 여부와 관계없이 매 전송마다 참여자 여부를 다시 확인합니다.
        """
        try:
            if not await self.backend.user_belongs_to_chatroom(user_id, chatroom_id):
                log_security_event(
                    logger, "chatroom_send_denied", severity="low",
                    user_id=str(user_id), chatroom_id=str(chatroom_id)
                )
                await self.router.send_to_connection(connection_id, ERROR, ACCESS_DENIED_MESSAGE)
                return

            if content is None or not content.strip():
                await self.router.send_to_connection(connection_id, ERROR, EMPTY_MESSAGE)
                return

            message = await self.backend.save_message(chatroom_id, user_id, content)

            await self.router.send_to_group(self.group_name(chatroom_id), RECEIVE_MESSAGE, message)
            log_websocket_event(
                logger, "message", str(user_id), str(chatroom_id),
                connection_id=connection_id, message_id=str(message.id)
            )

        except BaseCustomException as e:
            await self.router.send_to_connection(connection_id, ERROR, e.message)
        except Exception:
            logger.exception(f"Error sending message from user {user_id} to chatroom {chatroom_id}")
            await self.router.send_to_connection(connection_id, ERROR, SEND_FAILED_MESSAGE)

    async def on_disconnected(self, connection_id: str) -> None:
        await self.router.remove_connection(connection_id)

    async def dispatch(self, connection_id: str, user_id: UUID, payload: Dict[str, Any]) -> None:
        """클라이언트 메시지를 해당 액션으로 라우팅합니다."""
        message_type = payload.get("type") if isinstance(payload, dict) else None

        if message_type == "ping":
            await self.router.send_to_connection(connection_id, PONG, {"timestamp": utc_now().isoformat()})
            return

        if message_type not in ("JoinChatroom", "LeaveChatroom", "SendMessage"):
            logger.warning(f"Unknown message type: {message_type} from user {user_id}")
            await self.router.send_to_connection(connection_id, ERROR, f"Unknown message type: {message_type}")
            return

        chatroom_id = _parse_uuid(payload.get("chatroomId"))
        if chatroom_id is None:
            await self.router.send_to_connection(connection_id, ERROR, "Invalid chatroom id")
            return

        if message_type == "JoinChatroom":
            await self.join_chatroom(connection_id, user_id, chatroom_id)
        elif message_type == "LeaveChatroom":
            await self.leave_chatroom(connection_id, chatroom_id)
        else:
            content = payload.get("content")
            await self.send_message(
                connection_id, user_id, chatroom_id,
                content if isinstance(content, str) else None
            )


def _parse_uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None
