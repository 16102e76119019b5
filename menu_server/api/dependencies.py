"""
API Dependencies

FastAPI dependency functions resolving the services stored on app.state
"""

from typing import Optional

from fastapi import Header
from starlette.requests import HTTPConnection

from menu_server.core.config import Settings
from menu_server.database.documents import DocumentStore
from menu_server.services.friendship_service import FriendshipService
from menu_server.services.server_data_service import ServerDataService
from menu_server.websockets.connection_manager import ConnectionManager


def get_document_store(conn: HTTPConnection) -> DocumentStore:
    return conn.app.state.documents


def get_connection_manager(conn: HTTPConnection) -> ConnectionManager:
    return conn.app.state.connection_manager


def get_friendship_service(conn: HTTPConnection) -> FriendshipService:
    return conn.app.state.friendship_service


def get_server_data_service(conn: HTTPConnection) -> ServerDataService:
    return conn.app.state.server_data_service


async def get_caller_uid(x_uid: Optional[str] = Header(None, alias="x-uid")) -> Optional[str]:
    """
    호출자 ID를 x-uid 헤더에서 읽습니다.

    서명 검증은 하지 않습니다. 클라이언트가 보낸 ID를 그대로 신뢰합니다.
    """
    return x_uid or None


def get_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings
