from typing import Any, Dict, List, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from swapstreet.core.logging import get_logger
from swapstreet.realtime.router import MessageRouter

logger = get_logger(__name__)


class ConnectionManager(MessageRouter):
    """프로세스 내 WebSocket 연결 및 그룹 관리"""

    def __init__(self):
        # 연결 ID별 WebSocket: {connection_id: websocket}
        self.connections: Dict[str, WebSocket] = {}
        # 그룹별 연결: {group: {connection_id, ...}}
        self.groups: Dict[str, Set[str]] = {}
        # 연결별 가입 그룹: {connection_id: {group, ...}}
        self.connection_groups: Dict[str, Set[str]] = {}

    async def connect(self, websocket: WebSocket, connection_id: str):
        """새로운 WebSocket 연결을 등록합니다."""
        await websocket.accept()
        self.connections[connection_id] = websocket
        self.connection_groups[connection_id] = set()
        logger.info(f"Connection {connection_id} registered")

    async def disconnect(self, connection_id: str):
        """연결 해제 시 모든 그룹에서 제거합니다."""
        await self.remove_connection(connection_id)
        logger.info(f"Connection {connection_id} disconnected")

    async def add_to_group(self, connection_id: str, group: str) -> None:
        if connection_id not in self.connections:
            return

        self.groups.setdefault(group, set()).add(connection_id)
        self.connection_groups.setdefault(connection_id, set()).add(group)

    async def remove_from_group(self, connection_id: str, group: str) -> None:
        members = self.groups.get(group)
        if members is not None:
            members.discard(connection_id)
            # 그룹에 연결이 없으면 그룹 자체를 제거
            if not members:
                del self.groups[group]

        if connection_id in self.connection_groups:
            self.connection_groups[connection_id].discard(group)

    async def remove_connection(self, connection_id: str) -> None:
        for group in list(self.connection_groups.get(connection_id, ())):
            await self.remove_from_group(connection_id, group)

        self.connection_groups.pop(connection_id, None)
        self.connections.pop(connection_id, None)

    async def send_to_connection(self, connection_id: str, event: str, data: Any = None) -> None:
        websocket = self.connections.get(connection_id)
        if websocket is None:
            return

        try:
            await websocket.send_json(self._frame(event, data))
        except Exception as e:
            logger.error(f"Failed to send {event} to connection {connection_id}: {e}")
            await self.remove_connection(connection_id)

    async def send_to_group(self, group: str, event: str, data: Any = None) -> None:
        frame = self._frame(event, data)
        failed = []

        for connection_id in list(self.groups.get(group, ())):
            websocket = self.connections.get(connection_id)
            if websocket is None:
                continue
            try:
                await websocket.send_json(frame)
            except Exception as e:
                logger.error(f"Failed to send {event} to connection {connection_id} in group {group}: {e}")
                failed.append(connection_id)

        # 전송 실패한 연결 정리
        for connection_id in failed:
            await self.remove_connection(connection_id)

    def get_group_connections(self, group: str) -> List[str]:
        return list(self.groups.get(group, ()))

    def get_connection_groups(self, connection_id: str) -> List[str]:
        return list(self.connection_groups.get(connection_id, ()))

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self.connections

    def get_connection_count(self) -> int:
        return len(self.connections)

    @staticmethod
    def _frame(event: str, data: Any) -> dict:
        return {"type": event, "data": jsonable_encoder(data, by_alias=True)}


# 전역 연결 매니저 인스턴스
manager = ConnectionManager()
