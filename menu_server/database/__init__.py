import logging
from .documents import DocumentStore

logger = logging.getLogger(__name__)

SERVER_DATA_DOCUMENT = "serverdata.json"
FRIENDS_DOCUMENT = "friends.json"

# 클라이언트가 주기적으로 가져가는 원격 설정 문서의 초기값
# - menu-version: 최신 릴리스 버전 (업데이트 안내에 표시)
# - min-version: 이 버전 미만이면 메뉴가 비활성화됨
# - min-console-version: 이 버전 미만이면 관리자 목록을 불러오지 않음
# - motd 자리표시자: {0}=버전, {1}=모드 수, {2}=빌드 종류, {3}=빌드 시각
DEFAULT_SERVER_DATA = {
    "menu-version": "8.5.1",
    "min-version": "8.0.0",
    "min-console-version": "1.0.0",
    "motd": "You are using build {0}. Welcome to ii's Stupid Menu!",
    "discord-invite": "https://discord.gg/iidk",
    "admins": [],
    "super-admins": [],
    "patreon": [],
    "poll": "What goes well with cheeseburgers?",
    "option-a": "Fries",
    "option-b": "Chips",
    "detected-mods": []
}


async def init_documents(store: DocumentStore):
    """Create the default documents that do not exist yet"""
    try:
        await store.ensure(SERVER_DATA_DOCUMENT, DEFAULT_SERVER_DATA)
        await store.ensure(FRIENDS_DOCUMENT, {})
        logger.info(f"Data documents ready in {store.data_dir}")
    except Exception as e:
        logger.error(f"Document initialization failed: {e}")
        raise


async def check_storage_health(store: DocumentStore):
    """Check that the data directory and its documents are usable"""
    writable = store.is_writable()
    server_data = await store.exists(SERVER_DATA_DOCUMENT)
    friends = await store.exists(FRIENDS_DOCUMENT)

    return {
        "writable": writable,
        "serverdata": server_data,
        "friends": friends,
        "overall": writable and server_data and friends
    }

__all__ = [
    "DocumentStore",
    "init_documents",
    "check_storage_health",
    "SERVER_DATA_DOCUMENT",
    "FRIENDS_DOCUMENT",
    "DEFAULT_SERVER_DATA"
]
