from fastapi import APIRouter, Depends
import logging

from menu_server.api.dependencies import get_server_data_service
from menu_server.core.errors import (
    StorageError,
    server_data_unavailable_error,
    tts_not_configured_error
)
from menu_server.services.server_data_service import ServerDataService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Server Data"])


@router.get("/serverdata")
async def get_server_data(
        service: ServerDataService = Depends(get_server_data_service)
):
    """
    원격 설정 문서를 반환합니다.

    클라이언트는 시작 시와 이후 약 60초마다 이 문서를 가져갑니다.
    """
    try:
        data = await service.get_server_data()
    except StorageError as e:
        logger.error(f"Error reading server data: {e}")
        raise server_data_unavailable_error()

    if data is None:
        raise server_data_unavailable_error()

    return data


@router.post("/tts")
async def text_to_speech():
    """TTS 제공자가 연결되지 않아 항상 501을 반환합니다."""
    raise tts_not_configured_error()
