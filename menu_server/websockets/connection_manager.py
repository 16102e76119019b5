import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class ConnectionManager:
    """사용자 ID별 WebSocket 연결 레지스트리"""

    def __init__(self):
        # 사용자별 연결: {user_id: websocket}
        self.user_connections: Dict[str, WebSocket] = {}
        # 연결별 전송 락: 한 대상에 대한 전송 순서 보장, 다른 대상은 막지 않음
        self._send_locks: Dict[str, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    async def register(self, user_id: str, websocket: WebSocket):
        """
        사용자 ID에 연결을 등록합니다.

        같은 ID로 기존 연결이 있으면 매핑만 덮어쓰며, 기존 소켓은 닫지 않습니다.
        """
        async with self._lock:
            previous = self.user_connections.get(user_id)
            self.user_connections[user_id] = websocket
            if previous is not websocket or user_id not in self._send_locks:
                self._send_locks[user_id] = asyncio.Lock()

        if previous is not None and previous is not websocket:
            logger.info(f"User {user_id} re-registered, previous connection superseded")

    async def unregister(self, user_id: str, websocket: WebSocket) -> bool:
        """
        현재 등록된 연결이 websocket일 때만 매핑을 제거합니다.

        Returns:
            bool: 제거되었으면 True
        """
        async with self._lock:
            if self.user_connections.get(user_id) is not websocket:
                return False
            del self.user_connections[user_id]
            self._send_locks.pop(user_id, None)
            return True

    async def send(self, user_id: str, message: Dict[str, Any]):
        """
        특정 사용자에게 JSON 메시지를 전송합니다.

        연결이 없거나 열려 있지 않으면 아무것도 하지 않습니다. 전송 실패는
        기록만 하고 재시도하지 않습니다. 레지스트리 락은 조회에만 쓰고,
        실제 쓰기는 대상 연결의 락 아래에서 수행합니다.
        """
        async with self._lock:
            websocket = self.user_connections.get(user_id)
            send_lock = self._send_locks.get(user_id)

        if websocket is None or send_lock is None:
            return

        async with send_lock:
            if not self._is_open(websocket):
                return

            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.warning(f"Failed to send message to user {user_id}: {e}")

    @staticmethod
    def _is_open(websocket: WebSocket) -> bool:
        return (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        )

    def get_connection(self, user_id: str) -> Optional[WebSocket]:
        return self.user_connections.get(user_id)

    def is_user_connected(self, user_id: str) -> bool:
        """사용자가 연결되어 있는지 확인합니다."""
        return user_id in self.user_connections

    def get_online_users(self) -> List[str]:
        """현재 등록된 모든 사용자 목록을 반환합니다."""
        return list(self.user_connections.keys())

    def get_online_users_count(self) -> int:
        """현재 등록된 사용자 수를 반환합니다."""
        return len(self.user_connections)
