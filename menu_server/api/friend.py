from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from menu_server.api.dependencies import get_caller_uid, get_friendship_service
from menu_server.core.errors import (
    InvalidArgumentError,
    StorageError,
    missing_uids_error,
    StorageException
)
from menu_server.schemas.friendship import (
    FriendTargetRequest,
    FriendActionResponse,
    FriendStateResponse,
    SuccessResponse
)
from menu_server.services.friendship_service import FriendshipService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Friends"])


def _resolve_ids(caller_uid: Optional[str], payload: Optional[FriendTargetRequest]):
    """헤더 우선, 없으면 body의 callerUid를 호출자로 사용합니다."""
    payload = payload or FriendTargetRequest()
    return caller_uid or payload.callerUid, payload.uid


@router.get("/getfriends", response_model=FriendStateResponse)
async def get_friends(
        uid: Optional[str] = Query(None, description="x-uid 헤더가 없을 때 사용하는 사용자 ID"),
        caller_uid: Optional[str] = Depends(get_caller_uid),
        service: FriendshipService = Depends(get_friendship_service)
):
    """
    호출자의 친구 상태를 조회합니다.

    호출자 ID가 없으면 빈 상태를 반환합니다.

    Returns:
        FriendStateResponse: friends, pending, incomingRequests, blocked
    """
    try:
        state = await service.get_friend_state(caller_uid or uid)
        return FriendStateResponse(**state)

    except StorageError as e:
        logger.error(f"Error getting friend state: {e}")
        raise StorageException("Failed to read friend data")


@router.post("/frienduser", response_model=FriendActionResponse)
async def friend_user(
        payload: Optional[FriendTargetRequest] = None,
        caller_uid: Optional[str] = Depends(get_caller_uid),
        service: FriendshipService = Depends(get_friendship_service)
):
    """
    친구 요청을 보내거나, 상대가 이미 요청한 경우 수락합니다.

    Args:
        payload: 대상 사용자 ID (uid)
        caller_uid: x-uid 헤더의 호출자 ID

    Returns:
        FriendActionResponse: action = accepted | requested
    """
    caller_id, target_id = _resolve_ids(caller_uid, payload)

    try:
        action = await service.request_or_accept(caller_id, target_id)
        return FriendActionResponse(success=True, action=action)

    except InvalidArgumentError:
        raise missing_uids_error()
    except StorageError as e:
        logger.error(f"Error processing friend request: {e}")
        raise StorageException("Failed to save friend data")


@router.post("/unfrienduser", response_model=SuccessResponse)
async def unfriend_user(
        payload: Optional[FriendTargetRequest] = None,
        caller_uid: Optional[str] = Depends(get_caller_uid),
        service: FriendshipService = Depends(get_friendship_service)
):
    """
    친구 삭제 / 보낸 요청 취소 / 받은 요청 거절

    관계가 없어도 성공으로 응답합니다.
    """
    caller_id, target_id = _resolve_ids(caller_uid, payload)

    try:
        await service.unfriend(caller_id, target_id)
        return SuccessResponse(success=True)

    except InvalidArgumentError:
        raise missing_uids_error()
    except StorageError as e:
        logger.error(f"Error removing relationship: {e}")
        raise StorageException("Failed to save friend data")
