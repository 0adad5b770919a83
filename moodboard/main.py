# moodboard/main.py
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from concurrent.futures import ThreadPoolExecutor
import logging

from moodboard.config.settings import settings
from moodboard.delivery.api.items import router
from moodboard.domain.errors import InvalidPayload
from moodboard.domain.store import Store
from moodboard.infrastructure.file.store import FileStore
from moodboard.infrastructure.memory.store import MemoryStore

logger = logging.getLogger("uvicorn.error")

# PUT is served for updates, so it is advertised alongside the other verbs.
ALLOWED_METHODS = "POST, GET, PUT, DELETE"
_ALLOWED_METHOD_SET = {m.strip() for m in ALLOWED_METHODS.split(",")}

def build_store(store_path=None) -> Store:
    """Pick the backend: a data directory means the file store, nothing means memory."""
    if store_path:
        logger.info(f"Using file-based store {store_path!r}")
        return FileStore(store_path)
    logger.info("Using in-memory store")
    return MemoryStore()

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.executor = ThreadPoolExecutor(max_workers=max(1, settings.MAX_WORKERS))
    app.state.store = build_store(settings.STORE_PATH)
    logger.info(f"Service '{settings.PROJECT_NAME}' started (mode: {settings.ENVIRONMENT}).")
    logger.info(f"Shared ThreadPoolExecutor created with {settings.MAX_WORKERS} workers.")
    yield
    logger.info("Shutting down ThreadPoolExecutor...")
    app.state.executor.shutdown(wait=True)
    logger.info("Service stopped.")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Personal moodboard: positioned images on a shared, reorderable board",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(InvalidPayload)
async def invalid_payload_handler(request: Request, exc: InvalidPayload):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
        headers={"Accept": exc.accept},
    )

@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Every path shares one method set, routed or not.
    unknown_method = exc.status_code == 404 and request.method not in _ALLOWED_METHOD_SET
    if exc.status_code == 405 or unknown_method:
        return Response(status_code=405, headers={"Allow": ALLOWED_METHODS})
    return await http_exception_handler(request, exc)

@app.get("/health")
async def health_check(request: Request):
    store = getattr(request.app.state, "store", None)
    return {"status": "ok", "service": settings.PROJECT_NAME, "store": getattr(store, "kind", None)}

app.include_router(router)
