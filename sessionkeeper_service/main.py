import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from .config import SessionKeeperSettings
from .services.session_store import SessionStoreError, SessionStoreService
from .api import api_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = SessionKeeperSettings()
    app.state.settings = settings

    store_service = SessionStoreService(settings.sessions_path)
    app.state.store_service = store_service
    logger.info("Session store at %s", store_service.path)

    # Run maintenance once at startup if configured
    if settings.auto_maintain:
        try:
            store = await store_service.load()
            report = await store_service.save(store)
            logger.info("Startup maintenance: %s", report.model_dump())
        except (SessionStoreError, ValidationError, OSError) as e:
            logger.warning("Startup maintenance failed (run POST /api/sessions/maintain manually): %s", e)

    yield


app = FastAPI(
    title="SessionKeeper Service",
    version="0.1.0",
    description="Sidecar that keeps the sessions.json store bounded in age, size and footprint",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Optional bearer token authentication.

    When SESSIONKEEPER_SERVICE_TOKEN is set, all requests must include
    a matching Authorization: Bearer <token> header.
    When not set, all requests are allowed (local dev mode).
    """

    async def dispatch(self, request: Request, call_next):
        token = request.app.state.settings.sessionkeeper_service_token
        if token:
            auth = request.headers.get("authorization", "")
            if not auth.startswith("Bearer ") or auth[7:] != token:
                return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
        return await call_next(request)


app.add_middleware(BearerTokenMiddleware)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    settings = SessionKeeperSettings()
    uvicorn.run(
        "sessionkeeper_service.main:app",
        host="127.0.0.1",
        port=settings.sessionkeeper_service_port,
    )
