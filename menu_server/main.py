"""
Menu Server - FastAPI Application

게임 클라이언트 메뉴 애드온을 위한 원격 설정 및 실시간 친구 릴레이 서버
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from menu_server import api
from menu_server.api import include_routers
from menu_server.core.config import Settings, settings as default_settings
from menu_server.core.logging import setup_logging
from menu_server.database import init_documents
from menu_server.database.documents import DocumentStore
from menu_server.middleware.error_handler import ErrorHandlerMiddleware, create_http_exception_handler
from menu_server.middleware.logging_middleware import LoggingMiddleware
from menu_server.services.friend_store import FriendStore
from menu_server.services.friendship_service import FriendshipService
from menu_server.services.server_data_service import ServerDataService
from menu_server.websockets.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Build the application and its services"""
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        # Startup
        setup_logging(config)
        await init_documents(app.state.documents)
        logger.info(f"{config.app_name} starting up on port {config.port}")

        yield

        # Shutdown
        logger.info(f"{config.app_name} shutting down...")

    app = FastAPI(
        title=config.app_name,
        version=config.version,
        lifespan=lifespan
    )

    # 서비스 인스턴스 (의존성으로 주입)
    documents = DocumentStore(config.data_dir)
    connection_manager = ConnectionManager()
    friend_store = FriendStore(documents)

    app.state.settings = config
    app.state.documents = documents
    app.state.connection_manager = connection_manager
    app.state.friendship_service = FriendshipService(friend_store, connection_manager)
    app.state.server_data_service = ServerDataService(documents)

    # Middleware (마지막에 추가한 것이 가장 바깥)
    app.add_middleware(ErrorHandlerMiddleware, debug=config.debug)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, create_http_exception_handler())

    # Include routers
    include_routers(app, "api", api.__path__)

    # Prometheus metrics
    if config.enable_metrics:
        Instrumentator().instrument(app).expose(app)

    @app.get("/")
    async def root():
        return {
            "service": config.app_name,
            "version": config.version,
            "status": "running"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "menu_server.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug
    )
