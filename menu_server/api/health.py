from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime, timezone

from menu_server.api.dependencies import get_connection_manager, get_document_store, get_settings
from menu_server.core.config import Settings
from menu_server.database import check_storage_health
from menu_server.database.documents import DocumentStore
from menu_server.websockets.connection_manager import ConnectionManager

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    documents: DocumentStore = Depends(get_document_store),
    manager: ConnectionManager = Depends(get_connection_manager),
    settings: Settings = Depends(get_settings)
):
    """Application health check endpoint"""
    try:
        storage_health = await check_storage_health(documents)

        overall_status = "healthy" if storage_health["overall"] else "unhealthy"

        return {
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc),
            "storage": {
                "data_dir": str(documents.data_dir),
                "writable": storage_health["writable"],
                "serverdata": "present" if storage_health["serverdata"] else "missing",
                "friends": "present" if storage_health["friends"] else "missing"
            },
            "relay": {
                "online_count": manager.get_online_users_count()
            },
            "service": settings.app_name
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"Health check failed: {str(e)}"
        )


@router.get("/health/ready")
async def readiness_check(documents: DocumentStore = Depends(get_document_store)):
    """Readiness probe endpoint"""
    storage_health = await check_storage_health(documents)

    if not storage_health["overall"]:
        raise HTTPException(
            status_code=503,
            detail="Service not ready - data documents unavailable"
        )

    return {"status": "ready"}


@router.get("/health/live")
async def liveness_check():
    """Liveness probe endpoint"""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc)}
