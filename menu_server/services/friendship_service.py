import logging
import time
from typing import Any, Dict, List

from menu_server.core.errors import InvalidArgumentError
from menu_server.services.friend_store import FriendStore
from menu_server.websockets.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)

NOTIFICATION_PREFIX = "<color=grey>[</color><color=green>FRIENDS</color><color=grey>]</color>"
NOTIFICATION_DISPLAY_MS = 5000

REQUEST_ACCEPTED_MESSAGE = "Your friend request was accepted."
NEW_REQUEST_MESSAGE = "You have a new friend request."


def build_notification(text: str) -> Dict[str, Any]:
    """클라이언트 알림 메시지 생성 (time은 화면 표시 시간, ms)"""
    return {
        "command": "notification",
        "from": "Server",
        "message": f"{NOTIFICATION_PREFIX} {text}",
        "time": NOTIFICATION_DISPLAY_MS
    }


def friend_entry(user_id: str) -> Dict[str, str]:
    return {"currentUserID": user_id, "currentName": user_id}


class FriendshipService:
    """
    친구 요청 / 수락 / 삭제 처리

    pending 방향 규칙: A가 B에게 요청하면 A의 레코드에 B가 기록됩니다
    (B ∈ A.pending). 수락 판정과 받은 요청 조회 모두 이 방향을 따릅니다.
    """

    def __init__(self, store: FriendStore, manager: ConnectionManager):
        self.store = store
        self.manager = manager

    async def request_or_accept(self, caller_id: str, target_id: str) -> str:
        """
        친구 요청을 보내거나, 상대가 이미 요청했다면 수락합니다.

        Args:
            caller_id: 요청하는 사용자 ID
            target_id: 대상 사용자 ID

        Returns:
            str: "accepted" 또는 "requested"

        Raises:
            InvalidArgumentError: ID가 비어 있는 경우
        """
        if not caller_id or not target_id:
            raise InvalidArgumentError("Missing uids")

        async with self.store.locked():
            graph = await self.store.load()
            caller = self.store.ensure(graph, caller_id)
            target = self.store.ensure(graph, target_id)

            # 상대가 먼저 요청했으면 수락
            if caller_id in target["pending"]:
                target["pending"] = [uid for uid in target["pending"] if uid != caller_id]
                caller["friends"][target_id] = friend_entry(target_id)
                target["friends"][caller_id] = friend_entry(caller_id)

                await self.store.save(graph)
                await self.manager.send(target_id, build_notification(REQUEST_ACCEPTED_MESSAGE))

                logger.info(f"Friend request accepted: {caller_id} <-> {target_id}")
                return "accepted"

            if target_id not in caller["pending"]:
                caller["pending"].append(target_id)

            await self.store.save(graph)
            await self.manager.send(target_id, build_notification(NEW_REQUEST_MESSAGE))

            logger.info(f"Friend request sent: {caller_id} -> {target_id}")
            return "requested"

    async def unfriend(self, caller_id: str, target_id: str) -> bool:
        """
        친구 삭제, 보낸 요청 취소, 받은 요청 거절을 한 번에 처리합니다.

        관계가 없어도 성공으로 처리합니다.
        """
        if not caller_id or not target_id:
            raise InvalidArgumentError("Missing uids")

        async with self.store.locked():
            graph = await self.store.load()
            caller = self.store.ensure(graph, caller_id)
            target = self.store.ensure(graph, target_id)

            caller["friends"].pop(target_id, None)
            target["friends"].pop(caller_id, None)
            caller["pending"] = [uid for uid in caller["pending"] if uid != target_id]
            target["pending"] = [uid for uid in target["pending"] if uid != caller_id]

            await self.store.save(graph)

        logger.info(f"Relationship removed: {caller_id} x {target_id}")
        return True

    async def get_friend_state(self, user_id: str) -> Dict[str, Any]:
        """
        사용자의 친구 상태를 조회합니다.

        incomingRequests는 모든 레코드를 훑어 pending에 user_id가 있는 사용자를
        모읍니다 (사용자 수에 비례하는 비용).
        """
        if not user_id:
            return {
                "friends": {},
                "pending": [],
                "incomingRequests": [],
                "blocked": []
            }

        start_time = time.time()
        graph = await self.store.load()
        mine = self.store.ensure(graph, user_id)

        incoming: List[str] = [
            uid for uid, record in graph.items()
            if isinstance(record, dict)
            and isinstance(record.get("pending"), list)
            and user_id in record["pending"]
        ]

        logger.debug(
            f"Friend state for {user_id} computed in {(time.time() - start_time) * 1000:.1f}ms "
            f"over {len(graph)} records"
        )

        return {
            "friends": mine["friends"],
            "pending": mine["pending"],
            "incomingRequests": incoming,
            "blocked": mine["blocked"]
        }
