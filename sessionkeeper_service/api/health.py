import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from ..services.maintenance import resolve_maintenance_config
from ..services.rotation import list_backups
from ..services.session_store import SessionStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/health")
async def health(request: Request):
    store_service = request.app.state.store_service

    sessions_info = {"path": None, "exists": False, "size_bytes": 0, "count": 0, "backups": 0}
    if store_service:
        path = store_service.path
        sessions_info["path"] = str(path)
        sessions_info["backups"] = len(list_backups(path))
        if path.exists():
            sessions_info["exists"] = True
            sessions_info["size_bytes"] = path.stat().st_size
            try:
                sessions_info["count"] = len(await store_service.load())
            except SessionStoreError as e:
                logger.warning("Health check could not read sessions file: %s", e)
                sessions_info["count"] = None

    try:
        maintenance = resolve_maintenance_config().model_dump()
    except ValidationError as e:
        logger.warning("Health check found an invalid maintenance config: %s", e)
        maintenance = None

    return {
        "status": "ok",
        "sessions": sessions_info,
        "maintenance": maintenance,
    }
