# moodboard/delivery/api/items.py
from fastapi import APIRouter, Request, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from io import BytesIO
from typing import Dict, Optional, Type, TypeVar
import asyncio
import logging
import traceback

from moodboard.config.settings import settings
from moodboard.delivery.schemas.body import DeleteBody, ItemBody, MoveBody
from moodboard.domain.errors import DuplicateKey, InvalidPayload, NoSuchItem
from moodboard.domain.store import Store
from moodboard.infrastructure.image.sniff import content_type_or_default, detect_content_type

router = APIRouter()
logger = logging.getLogger("uvicorn.error")

JSON = "application/json"
MULTIPART = "multipart/form-data"

B = TypeVar("B", bound=BaseModel)

def get_store(request: Request) -> Store:
    return request.app.state.store

def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()

async def _parse_json(request: Request, model: Type[B]) -> B:
    if _media_type(request) != JSON:
        raise InvalidPayload("Content-Type must be application/json", status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise InvalidPayload(f"Invalid {model.__name__}: {e.error_count()} errors") from e

async def _run_store(request: Request, action: str, fn, *args, accept: Optional[str] = JSON):
    """Run a blocking store call on the shared executor and map store errors to HTTP."""
    headers: Optional[Dict[str, str]] = {"Accept": accept} if accept else None
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(request.app.state.executor, fn, *args)
    except NoSuchItem:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found", headers=headers)
    except DuplicateKey:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Item already exists", headers=headers)
    except Exception as e:
        logger.error(f"failed to {action}: {e}\n{traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
            headers=headers,
        )

def _read_image(store: Store, item_id: str) -> bytes:
    img = store.get_image(item_id)
    try:
        return img.read()
    finally:
        img.close()

@router.post("/")
async def create_item(request: Request, store: Store = Depends(get_store)):
    content_type = request.headers.get("content-type", "")
    if _media_type(request) != MULTIPART or "boundary=" not in content_type:
        raise InvalidPayload("Content-Type must be multipart/form-data", status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, MULTIPART)

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        raise InvalidPayload(f"Malformed multipart body: {e}", accept=MULTIPART) from e

    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise InvalidPayload("Missing 'file' field", accept=MULTIPART)

    data = await upload.read()
    await upload.close()

    loop = asyncio.get_running_loop()
    if await loop.run_in_executor(request.app.state.executor, detect_content_type, data) is None:
        raise InvalidPayload("Image must be a GIF, JPEG or PNG", status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, MULTIPART)

    item = await _run_store(request, "insert item", store.create, BytesIO(data), accept=MULTIPART)
    logger.info(f"Created item {item.id} ({len(data)} bytes)")
    return JSONResponse(content=item.id, headers={"Accept": MULTIPART})

@router.get("/")
async def list_items(request: Request, store: Store = Depends(get_store)):
    items = await _run_store(request, "list items", store.all, accept=None)
    return JSONResponse(content=[item.model_dump() for item in items])

@router.get("/image/{item_id}")
async def get_image(request: Request, item_id: str, store: Store = Depends(get_store)):
    data = await _run_store(request, "get image", _read_image, store, item_id, accept=None)
    return Response(
        content=data,
        media_type=content_type_or_default(data),
        headers={"Cache-Control": settings.IMAGE_CACHE_CONTROL},
    )

@router.put("/")
async def update_item(request: Request, store: Store = Depends(get_store)):
    body = await _parse_json(request, ItemBody)
    await _run_store(request, "update item", store.update, body.to_item())
    return Response(status_code=status.HTTP_200_OK, headers={"Accept": JSON})

@router.delete("/")
async def delete_item(request: Request, store: Store = Depends(get_store)):
    body = await _parse_json(request, DeleteBody)
    await _run_store(request, "delete item", store.delete, body.id)
    logger.info(f"Deleted item {body.id}")
    return Response(status_code=status.HTTP_200_OK, headers={"Accept": JSON})

@router.post("/move/{item_id}")
async def move_item(request: Request, item_id: str, store: Store = Depends(get_store)):
    target = await _parse_json(request, MoveBody)
    if target.before:
        await _run_store(request, "move item", store.move_before, item_id, target.before)
    else:
        await _run_store(request, "move item", store.move_after, item_id, target.after)
    return Response(status_code=status.HTTP_200_OK, headers={"Accept": JSON})
