import json
import pytest
import pytest_asyncio
from typing import AsyncGenerator, Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from starlette.websockets import WebSocketState

from menu_server.core.config import Settings
from menu_server.database.documents import DocumentStore
from menu_server.main import create_app
from menu_server.services.friend_store import FriendStore
from menu_server.services.friendship_service import FriendshipService
from menu_server.websockets.connection_manager import ConnectionManager


class FakeWebSocket:
    """send_text만 흉내내는 테스트용 WebSocket"""

    def __init__(self, fail_on_send: bool = False):
        self.sent = []
        self.fail_on_send = fail_on_send
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_text(self, data: str):
        if self.fail_on_send:
            raise RuntimeError("connection reset")
        self.sent.append(json.loads(data))

    def drop(self):
        """클라이언트 쪽 연결 끊김"""
        self.client_state = WebSocketState.DISCONNECTED


@pytest.fixture
def fake_websocket():
    """FakeWebSocket 팩토리"""
    return FakeWebSocket


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """임시 데이터 디렉토리를 사용하는 설정"""
    return Settings(
        data_dir=str(tmp_path / "data"),
        log_dir=str(tmp_path / "logs"),
        log_to_file=False,
        enable_metrics=False,
        debug=True
    )


@pytest.fixture
def documents(test_settings) -> DocumentStore:
    return DocumentStore(test_settings.data_dir)


@pytest.fixture
def friend_store(documents) -> FriendStore:
    return FriendStore(documents)


@pytest.fixture
def connection_manager() -> ConnectionManager:
    return ConnectionManager()


@pytest.fixture
def friendship_service(friend_store, connection_manager) -> FriendshipService:
    return FriendshipService(friend_store, connection_manager)


@pytest.fixture
def test_app(test_settings) -> FastAPI:
    return create_app(test_settings)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """테스트용 비동기 HTTP 클라이언트 (lifespan 미실행)"""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sync_client(test_app) -> Generator[TestClient, None, None]:
    """lifespan을 실행하는 동기 클라이언트 (WebSocket 테스트용)"""
    with TestClient(test_app) as client:
        yield client
