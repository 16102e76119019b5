import logging
from fastapi import APIRouter, WebSocket, Depends

from menu_server.api.dependencies import get_connection_manager
from menu_server.websockets.connection_manager import ConnectionManager
from menu_server.websockets.handlers import RelayMessageHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["WebSocket"])


@router.websocket("/")
async def relay_endpoint(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_connection_manager)
):
    """
    친구/관리자 릴레이 WebSocket 엔드포인트

    첫 메시지로 {"command": "register", "uid": "<user id>"}를 보내야 합니다.
    등록 후에는 invite, reqinvite, preferences, theme, macro, message,
    notification 명령을 target 사용자에게 전달합니다.
    """
    await websocket.accept()
    handler = RelayMessageHandler(websocket, manager)

    try:
        while True:
            message = await websocket.receive()

            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue

            try:
                await handler.handle_raw(raw)
            except Exception as e:
                # 처리 중 오류가 나도 연결은 유지
                logger.error(f"Error processing relay message from {handler.user_id}: {e}", exc_info=True)

    except Exception as e:
        logger.error(f"WebSocket error for user {handler.user_id}: {e}")

    finally:
        await handler.close()
