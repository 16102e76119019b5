import json
import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from fastapi import WebSocket

from menu_server.core.logging import log_websocket_event
from menu_server.websockets.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)

REGISTER_COMMAND = "register"
REGISTERED_COMMAND = "registered"
SERVER_SENDER = "Server"

# 대상 사용자에게 그대로 전달되는 명령 (대소문자 구분)
RELAY_COMMANDS = frozenset({
    "invite",
    "reqinvite",
    "preferences",
    "theme",
    "macro",
    "message",
    "notification",
})


class RelayState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    CLOSED = "closed"


class RelayMessageHandler:
    """
    연결 하나에 대한 릴레이 프로토콜 상태 머신

    UNREGISTERED 상태에서는 register 메시지만 받아들이고, REGISTERED 상태에서는
    허용된 명령을 target 사용자에게 전달합니다. 잘못된 메시지는 응답 없이 버립니다.
    """

    def __init__(self, websocket: WebSocket, manager: ConnectionManager):
        self.websocket = websocket
        self.manager = manager
        self.state = RelayState.UNREGISTERED
        self.user_id: Optional[str] = None

    @property
    def is_registered(self) -> bool:
        return self.state == RelayState.REGISTERED

    async def handle_raw(self, raw: Union[str, bytes]):
        """수신한 원본 프레임을 파싱하여 처리합니다."""
        if self.state == RelayState.CLOSED:
            return

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return

        if not isinstance(data, dict):
            return

        await self.handle_message(data)

    async def handle_message(self, data: Dict[str, Any]):
        if self.state == RelayState.UNREGISTERED:
            await self._handle_registration(data)
        elif self.state == RelayState.REGISTERED:
            await self._handle_relay(data)

    async def _handle_registration(self, data: Dict[str, Any]):
        """register 명령을 처리합니다. 그 외 메시지는 무시합니다."""
        if data.get("command") != REGISTER_COMMAND:
            return

        user_id = data.get("uid")
        if not isinstance(user_id, str) or not user_id:
            return

        self.user_id = user_id
        self.state = RelayState.REGISTERED
        await self.manager.register(user_id, self.websocket)

        log_websocket_event(logger, "connected", user_id)

        try:
            await self.websocket.send_text(json.dumps({
                "command": REGISTERED_COMMAND,
                "from": SERVER_SENDER
            }))
        except Exception as e:
            logger.warning(f"Failed to acknowledge registration for user {user_id}: {e}")

    async def _handle_relay(self, data: Dict[str, Any]):
        """허용된 명령을 target에게 from 필드를 붙여 전달합니다."""
        command = data.get("command")
        target = data.get("target")

        if not isinstance(command, str) or command not in RELAY_COMMANDS:
            return
        if not isinstance(target, str) or not target:
            return

        await self.manager.send(target, {**data, "from": self.user_id})

    async def close(self):
        """연결 종료 처리. 등록된 연결이면 레지스트리에서 제거합니다."""
        if self.state == RelayState.REGISTERED:
            removed = await self.manager.unregister(self.user_id, self.websocket)
            log_websocket_event(logger, "disconnected", self.user_id, removed=removed)

        self.state = RelayState.CLOSED
