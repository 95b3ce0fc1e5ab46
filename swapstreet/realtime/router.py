"""
Message routing capability used by the chat hub.

Connections are grouped by name; a connection may belong to any number of
groups. Implementations own the membership table and its consistency.
"""

from abc import ABC, abstractmethod
from typing import Any


class MessageRouter(ABC):

    @abstractmethod
    async def add_to_group(self, connection_id: str, group: str) -> None:
        ...

    @abstractmethod
    async def remove_from_group(self, connection_id: str, group: str) -> None:
        ...

    @abstractmethod
    async def remove_connection(self, connection_id: str) -> None:
        """Drop the connection from every group it belongs to."""

    @abstractmethod
    async def send_to_connection(self, connection_id: str, event: str, data: Any = None) -> None:
        ...

    @abstractmethod
    async def send_to_group(self, group: str, event: str, data: Any = None) -> None:
        ...
