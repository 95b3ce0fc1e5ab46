from .router import MessageRouter
from .connection_manager import ConnectionManager, manager
from .backend import ChatBackend, DatabaseChatBackend
from .hub import ChatHub

__all__ = [
    "MessageRouter",
    "ConnectionManager",
    "manager",
    "ChatBackend",
    "DatabaseChatBackend",
    "ChatHub",
]
