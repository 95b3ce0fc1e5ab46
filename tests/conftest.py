import pytest_asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator, Dict, List, Optional, Set, Tuple
from uuid import UUID, uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from swapstreet.main import app
from swapstreet.database import Base, get_db
from swapstreet.models import Chatroom, Listing, ListingImage, Message, Profile
from swapstreet.realtime.backend import ChatBackend
from swapstreet.realtime.router import MessageRouter
from swapstreet.schemas.chat import MessageResponse
from swapstreet.utils.auth import create_access_token


# 테스트용 인메모리 SQLite 데이터베이스 설정
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def test_engine():
    """테스트용 비동기 데이터베이스 엔진 생성"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 데이터베이스 세션"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """테스트용 비동기 HTTP 클라이언트"""
    def get_test_session():
        return test_session

    app.dependency_overrides[get_db] = get_test_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _create_profile(session: AsyncSession, first_name: str, last_name: str) -> Profile:
    profile = Profile(first_name=first_name, last_name=last_name, fsa="M5V")
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile


@pytest_asyncio.fixture
async def seller(test_session) -> Profile:
    """판매자 프로필"""
    return await _create_profile(test_session, "Sam", "Seller")


@pytest_asyncio.fixture
async def buyer(test_session) -> Profile:
    """구매자 프로필"""
    return await _create_profile(test_session, "Bea", "Buyer")


@pytest_asyncio.fixture
async def outsider(test_session) -> Profile:
    """채팅방에 참여하지 않는 프로필"""
    return await _create_profile(test_session, "Olly", "Outsider")


def make_token(profile: Profile) -> str:
    return create_access_token(data={"sub": str(profile.id)})


@pytest_asyncio.fixture
async def seller_headers(seller) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(seller)}"}


@pytest_asyncio.fixture
async def buyer_headers(buyer) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(buyer)}"}


@pytest_asyncio.fixture
async def outsider_headers(outsider) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(outsider)}"}


@pytest_asyncio.fixture
async def test_chatroom(test_session, seller, buyer) -> Chatroom:
    """판매자/구매자 채팅방"""
    chatroom = Chatroom(seller_id=seller.id, buyer_id=buyer.id, creation_time=BASE_TIME)
    test_session.add(chatroom)
    await test_session.commit()
    await test_session.refresh(chatroom)
    return chatroom


@pytest_asyncio.fixture
async def chatroom_messages(test_session, test_chatroom, seller, buyer) -> List[Message]:
    """시간순 메시지 3개"""
    messages = [
        Message(
            chatroom_id=test_chatroom.id,
            author_id=author.id,
            content=content,
            send_date=BASE_TIME + timedelta(minutes=i)
        )
        for i, (author, content) in enumerate([
            (buyer, "Is this jacket still available?"),
            (seller, "Yes it is"),
            (buyer, "Great, can we meet tomorrow?"),
        ])
    ]
    test_session.add_all(messages)
    await test_session.commit()
    return messages


@pytest_asyncio.fixture
async def listings(test_session, seller) -> Dict[str, Listing]:
    """
    검색용 리스팅

    created_at은 1시간 간격이며 이름 순서대로 최신입니다.
    """
    specs = [
        ("denim-desc", "Vintage Jacket", "Classic denim wash"),
        ("denim-name", "Denim Skirt", "Barely worn"),
        ("boots", "Leather Boots", "Size 9"),
        ("denim-jeans", "Denim Jeans", "Straight leg"),
    ]

    created = {}
    for i, (key, name, description) in enumerate(specs):
        listing = Listing(
            name=name,
            description=description,
            price=Decimal("25.00"),
            profile_id=seller.id,
            created_at=BASE_TIME + timedelta(hours=i)
        )
        test_session.add(listing)
        created[key] = listing
    await test_session.commit()

    test_session.add_all([
        ListingImage(listing_id=created["denim-name"].id, image_path="skirt/back.jpg", display_order=2),
        ListingImage(listing_id=created["denim-name"].id, image_path="skirt/front.jpg", display_order=1),
        ListingImage(listing_id=created["boots"].id, image_path="boots/side.jpg", display_order=1),
    ])
    await test_session.commit()
    return created


# =============================================================================
# 실시간 채팅 테스트 더블
# =============================================================================

class FakeRouter(MessageRouter):
    """전송된 이벤트를 기록하는 메모리 라우터"""

    def __init__(self):
        self.groups: Dict[str, Set[str]] = {}
        self.sent: List[Tuple[str, str, Any]] = []  # (connection_id, event, data)

    async def add_to_group(self, connection_id: str, group: str) -> None:
        self.groups.setdefault(group, set()).add(connection_id)

    async def remove_from_group(self, connection_id: str, group: str) -> None:
        self.groups.get(group, set()).discard(connection_id)

    async def remove_connection(self, connection_id: str) -> None:
        for members in self.groups.values():
            members.discard(connection_id)

    async def send_to_connection(self, connection_id: str, event: str, data: Any = None) -> None:
        self.sent.append((connection_id, event, data))

    async def send_to_group(self, group: str, event: str, data: Any = None) -> None:
        for connection_id in sorted(self.groups.get(group, ())):
            self.sent.append((connection_id, event, data))

    def events_for(self, connection_id: str, event: Optional[str] = None) -> List[Any]:
        return [
            data for cid, ev, data in self.sent
            if cid == connection_id and (event is None or ev == event)
        ]


class FakeBackend(ChatBackend):
    """채팅방 참여자 표를 가진 메모리 백엔드"""

    def __init__(self, members: Optional[Dict[UUID, Set[UUID]]] = None):
        self.members = members or {}
        self.saved: List[MessageResponse] = []
        self.fail_on_save: Optional[Exception] = None

    async def user_belongs_to_chatroom(self, user_id: UUID, chatroom_id: UUID) -> bool:
        return user_id in self.members.get(chatroom_id, set())

    async def save_message(self, chatroom_id: UUID, author_id: UUID, content: str) -> MessageResponse:
        if self.fail_on_save is not None:
            raise self.fail_on_save

        message = MessageResponse(
            id=uuid4(),
            send_date=datetime.now(timezone.utc),
            content=content,
            chatroom_id=chatroom_id,
            author_id=author_id
        )
        self.saved.append(message)
        return message
