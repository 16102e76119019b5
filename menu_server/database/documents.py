"""
Flat JSON document storage.

Each document is a single JSON file under the data directory. Writes go to a
temporary file first and are renamed into place, so readers never see a
half-written document.
"""

import json
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from menu_server.core.errors import StorageError
from menu_server.core.logging import log_storage_operation

logger = logging.getLogger(__name__)


class DocumentStore:
    """데이터 디렉토리 아래의 JSON 문서 읽기/쓰기"""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / name

    async def exists(self, name: str) -> bool:
        return await aiofiles.os.path.exists(self.path_for(name))

    async def read(self, name: str, default: Any = None) -> Any:
        """
        문서를 읽어 파싱된 JSON 값을 반환합니다.

        Args:
            name: 문서 파일명 (예: "friends.json")
            default: 문서가 없을 때 반환할 값

        Returns:
            Any: 파싱된 문서 또는 default

        Raises:
            StorageError: 파일을 읽을 수 없거나 JSON 형식이 올바르지 않은 경우
        """
        path = self.path_for(name)
        if not await aiofiles.os.path.exists(path):
            return default

        start_time = time.time()
        try:
            async with aiofiles.open(path, "rb") as f:
                raw = await f.read()
        except OSError as e:
            logger.error(f"Failed to read document {name}: {e}")
            raise StorageError(name, str(e)) from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Document {name} is not valid JSON: {e}")
            raise StorageError(name, f"invalid JSON: {e}") from e

        log_storage_operation(
            logger, "read", name,
            duration_ms=(time.time() - start_time) * 1000
        )
        return data

    async def write(self, name: str, data: Any) -> None:
        """문서 전체를 원자적으로 교체합니다."""
        path = self.path_for(name)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

        start_time = time.time()
        try:
            await aiofiles.os.makedirs(self.data_dir, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write document {name}: {e}")
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
            raise StorageError(name, str(e)) from e

        log_storage_operation(
            logger, "write", name,
            duration_ms=(time.time() - start_time) * 1000
        )

    async def ensure(self, name: str, default: Any) -> bool:
        """문서가 없으면 기본값으로 생성합니다. 생성했으면 True."""
        if await self.exists(name):
            return False
        await self.write(name, default)
        logger.info(f"Created default document {name}")
        return True

    def is_writable(self) -> bool:
        """데이터 디렉토리에 쓸 수 있는지 확인"""
        return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK)
