"""
친구 그래프 저장소

friends.json 문서 하나에 전체 친구 그래프를 보관합니다.
{uid: {"friends": {...}, "pending": [...], "blocked": [...]}}
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from menu_server.database import FRIENDS_DOCUMENT
from menu_server.database.documents import DocumentStore

FriendGraph = Dict[str, Dict[str, Any]]


def empty_record() -> Dict[str, Any]:
    return {"friends": {}, "pending": [], "blocked": []}


class FriendStore:
    """친구 그래프 load / ensure / save"""

    def __init__(self, documents: DocumentStore):
        self.documents = documents
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def locked(self) -> AsyncIterator["FriendStore"]:
        """읽기-수정-저장 구간을 단일 작성자로 직렬화합니다."""
        async with self._lock:
            yield self

    async def load(self) -> FriendGraph:
        """전체 그래프를 읽습니다. 문서가 없으면 빈 그래프."""
        graph = await self.documents.read(FRIENDS_DOCUMENT, default={})
        if not isinstance(graph, dict):
            return {}
        return graph

    @staticmethod
    def ensure(graph: FriendGraph, user_id: str) -> Dict[str, Any]:
        """
        user_id의 레코드를 반환합니다. 없으면 기본값으로 생성합니다.

        Args:
            graph: load()로 읽은 그래프 (제자리에서 수정됨)
            user_id: 사용자 ID

        Returns:
            Dict[str, Any]: friends / pending / blocked 필드가 보장된 레코드
        """
        record = graph.get(user_id)
        if not isinstance(record, dict):
            record = empty_record()
            graph[user_id] = record

        if not isinstance(record.get("friends"), dict):
            record["friends"] = {}
        if not isinstance(record.get("pending"), list):
            record["pending"] = []
        if not isinstance(record.get("blocked"), list):
            record["blocked"] = []

        return record

    async def save(self, graph: FriendGraph) -> None:
        await self.documents.write(FRIENDS_DOCUMENT, graph)
