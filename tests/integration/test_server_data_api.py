import pytest
from httpx import AsyncClient
from fastapi import status

from menu_server.database import DEFAULT_SERVER_DATA, SERVER_DATA_DOCUMENT, init_documents


class TestServerDataAPI:
    """GET /serverdata, POST /tts 테스트"""

    @pytest.mark.asyncio
    async def test_server_data_returns_document(self, client: AsyncClient, documents):
        await init_documents(documents)

        response = await client.get("/serverdata")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data == DEFAULT_SERVER_DATA
        assert data["menu-version"] == "8.5.1"
        assert data["min-version"] == "8.0.0"

    @pytest.mark.asyncio
    async def test_server_data_reflects_edits(self, client: AsyncClient, documents):
        """문서를 수정하면 재시작 없이 반영"""
        await documents.write(SERVER_DATA_DOCUMENT, {**DEFAULT_SERVER_DATA, "motd": "maintenance tonight"})

        response = await client.get("/serverdata")

        assert response.json()["motd"] == "maintenance tonight"

    @pytest.mark.asyncio
    async def test_server_data_missing(self, client: AsyncClient):
        response = await client.get("/serverdata")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Server data unavailable"

    @pytest.mark.asyncio
    async def test_server_data_corrupt(self, client: AsyncClient, documents):
        documents.data_dir.mkdir(parents=True)
        documents.path_for(SERVER_DATA_DOCUMENT).write_text("not json", encoding="utf-8")

        response = await client.get("/serverdata")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    @pytest.mark.asyncio
    async def test_server_data_not_utf8(self, client: AsyncClient, documents):
        documents.data_dir.mkdir(parents=True)
        documents.path_for(SERVER_DATA_DOCUMENT).write_bytes(b'{"motd": "\xff"}')

        response = await client.get("/serverdata")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Server data unavailable"

    @pytest.mark.asyncio
    async def test_tts_not_configured(self, client: AsyncClient):
        response = await client.post("/tts", json={"text": "hello"})

        assert response.status_code == status.HTTP_501_NOT_IMPLEMENTED
        assert response.json()["message"] == "TTS not configured on this server."


class TestHealthAPI:
    """헬스 체크 테스트"""

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    @pytest.mark.asyncio
    async def test_health_after_init(self, client: AsyncClient, documents):
        await init_documents(documents)

        response = await client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "healthy"
        assert body["relay"]["online_count"] == 0

    @pytest.mark.asyncio
    async def test_ready_before_init(self, client: AsyncClient):
        response = await client.get("/health/ready")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_live(self, client: AsyncClient):
        response = await client.get("/health/live")

        assert response.json()["status"] == "alive"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/health/live")

        assert "x-request-id" in response.headers
