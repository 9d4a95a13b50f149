from fastapi import APIRouter, Request, HTTPException

from ..models.sessions import CapRequest, PruneRequest, RotateRequest
from ..services.maintenance import cap_entry_count, prune_stale_entries
from ..services.rotation import list_backups, rotate_session_file
from ..services.session_store import SessionStoreError

router = APIRouter(prefix="/api/sessions")


def _get_store_service(request: Request):
    svc = request.app.state.store_service
    if not svc:
        raise HTTPException(status_code=503, detail="Session store not available")
    return svc


async def _load(svc):
    try:
        return await svc.load()
    except SessionStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/")
async def list_sessions(request: Request):
    svc = _get_store_service(request)
    store = await _load(svc)
    sessions = {key: entry.to_json() for key, entry in store.items()}
    return {"sessions": sessions, "count": len(sessions)}


@router.post("/prune")
async def prune_sessions(request: Request, body: PruneRequest):
    svc = _get_store_service(request)
    store = await _load(svc)
    pruned = prune_stale_entries(store, body.max_age_ms)
    if pruned:
        await svc.save(store, maintenance=False)
    return {"pruned": pruned, "remaining": len(store)}


@router.post("/cap")
async def cap_sessions(request: Request, body: CapRequest):
    svc = _get_store_service(request)
    store = await _load(svc)
    evicted = cap_entry_count(store, body.max_entries)
    if evicted:
        await svc.save(store, maintenance=False)
    return {"evicted": evicted, "remaining": len(store)}


@router.post("/rotate")
async def rotate_sessions(request: Request, body: RotateRequest):
    svc = _get_store_service(request)
    rotated = await rotate_session_file(svc.path, body.max_bytes)
    return {"rotated": rotated, "backups": [p.name for p in list_backups(svc.path)]}


@router.post("/maintain")
async def maintain_sessions(request: Request):
    svc = _get_store_service(request)
    store = await _load(svc)
    report = await svc.save(store)
    return report.model_dump()


@router.get("/{session_key}")
async def get_session(request: Request, session_key: str):
    svc = _get_store_service(request)
    store = await _load(svc)
    entry = store.get(session_key)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return entry.to_json()
