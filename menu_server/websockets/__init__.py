"""
WebSocket 실시간 릴레이 모듈

주요 구성 요소:
- connection_manager: 사용자 ID별 WebSocket 연결 레지스트리
- handlers: 연결별 등록/릴레이 프로토콜 처리
"""

from .connection_manager import ConnectionManager
from .handlers import RelayMessageHandler, RelayState, RELAY_COMMANDS

__all__ = [
    "ConnectionManager",
    "RelayMessageHandler",
    "RelayState",
    "RELAY_COMMANDS"
]
