from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import Field

from swapstreet.schemas.base import CamelModel


class ChatroomCreate(CamelModel):
    """채팅방 생성 스키마"""
    seller_id: UUID = Field(..., description="판매자 프로필 ID")
    buyer_id: UUID = Field(..., description="구매자 프로필 ID")


class MessageResponse(CamelModel):
    """메시지 응답 스키마"""
    id: UUID = Field(..., description="메시지 ID")
    send_date: Optional[datetime] = Field(None, description="전송일시 (서버 기준)")
    content: str = Field(..., description="메시지 내용")
    chatroom_id: UUID = Field(..., description="채팅방 ID")
    author_id: UUID = Field(..., description="작성자 프로필 ID")


class ChatroomResponse(CamelModel):
    """채팅방 응답 스키마"""
    id: UUID = Field(..., description="채팅방 ID")
    creation_time: Optional[datetime] = Field(None, description="생성일시")
    seller_id: UUID = Field(..., description="판매자 프로필 ID")
    buyer_id: UUID = Field(..., description="구매자 프로필 ID")
    messages: List[MessageResponse] = Field(default_factory=list, description="메시지 목록")
