"""
Remote configuration document service.
"""

from typing import Any, Dict, Optional

from menu_server.database import SERVER_DATA_DOCUMENT
from menu_server.database.documents import DocumentStore


class ServerDataService:
    """serverdata.json 조회"""

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    async def get_server_data(self) -> Optional[Dict[str, Any]]:
        """
        설정 문서를 반환합니다. 문서가 없거나 객체가 아니면 None.

        Raises:
            StorageError: 문서를 읽거나 파싱할 수 없는 경우
        """
        data = await self.documents.read(SERVER_DATA_DOCUMENT)
        if not isinstance(data, dict):
            return None
        return data
