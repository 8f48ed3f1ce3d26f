# src/app/routers/sauces.py
"""
Sauce catalog routes. Every route requires a bearer token.
"""
from __future__ import annotations

import json
import logging

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    Response,
    UploadFile,
    status,
)
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.app.deps import CurrentUser, get_current_user, get_sauce_service
from src.app.domain.errors import (
    AlreadyReacted,
    ConflictingReaction,
    InvalidReactionValue,
    NothingToRemove,
    RepositoryError,
    SauceNotFoundError,
    SaucePermissionError,
    StorageError,
    UnsupportedImageError,
)
from src.app.domain.models import ImageUpload, Reaction
from src.app.schemas.sauces import (
    MessageResponse,
    ReactionRequest,
    SaucePayload,
    SauceResponse,
    is_valid_image_filename,
)
from src.app.services.sauce_service import SauceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sauces", tags=["sauces"])

# Max image size (5MB)
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024


def _parse_sauce_field(raw: str) -> SaucePayload:
    try:
        return SaucePayload.model_validate_json(raw)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=_first_error(exc))


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Invalid sauce")
    return f"Invalid sauce {location}: {message}" if location else message


async def _read_image(upload: StarletteUploadFile) -> ImageUpload:
    if not is_valid_image_filename(upload.filename):
        raise HTTPException(status_code=400, detail="Invalid sauce image extension")
    data = await upload.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty image")
    if len(data) > MAX_IMAGE_SIZE_BYTES:
        raise HTTPException(
            status_code=400,
            detail=f"Image too large. Maximum size: {MAX_IMAGE_SIZE_BYTES // (1024*1024)}MB",
        )
    return ImageUpload(filename=upload.filename or "image", content_type=upload.content_type, data=data)


@router.get("", response_model=list[SauceResponse])
async def list_sauces(
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> list[SauceResponse]:
    try:
        sauces = await run_in_threadpool(service.list_sauces)
    except RepositoryError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return [SauceResponse.from_record(sauce) for sauce in sauces]


@router.get("/{sauce_id}", response_model=SauceResponse)
async def get_sauce(
    sauce_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> SauceResponse:
    try:
        sauce = await run_in_threadpool(service.get_sauce, sauce_id)
    except SauceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return SauceResponse.from_record(sauce)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_sauce(
    request: Request,
    sauce: str = Form(...),
    image: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> MessageResponse:
    payload = _parse_sauce_field(sauce)
    upload = await _read_image(image)
    try:
        await run_in_threadpool(
            service.create_sauce, user.id, payload.to_content(), upload, str(request.base_url)
        )
    except UnsupportedImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except (RepositoryError, StorageError) as exc:
        logger.error("Failed to create sauce: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="Sauce registered !")


@router.put("/{sauce_id}", response_model=MessageResponse)
async def update_sauce(
    sauce_id: str,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> MessageResponse:
    """
    Accepts either multipart (`sauce` JSON string + `image` file) or a plain
    JSON body when the image is unchanged.
    """
    upload = None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        raw_sauce = form.get("sauce")
        if not isinstance(raw_sauce, str):
            raise HTTPException(status_code=400, detail="Missing sauce field")
        payload = _parse_sauce_field(raw_sauce)
        image = form.get("image")
        if isinstance(image, StarletteUploadFile):
            upload = await _read_image(image)
    else:
        try:
            body = await request.json()
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        try:
            payload = SaucePayload.model_validate(body)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=_first_error(exc))

    try:
        await run_in_threadpool(
            service.update_sauce,
            sauce_id,
            user.id,
            payload.to_content(),
            base_url=str(request.base_url),
            image=upload,
        )
    except SauceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except SaucePermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except UnsupportedImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except (RepositoryError, StorageError) as exc:
        logger.error("Failed to update sauce %s: %s", sauce_id, exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="Sauce updated !")


@router.delete("/{sauce_id}", response_model=MessageResponse)
async def delete_sauce(
    sauce_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> MessageResponse:
    try:
        await run_in_threadpool(service.delete_sauce, sauce_id, user.id)
    except SauceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except SaucePermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except (RepositoryError, StorageError) as exc:
        logger.error("Failed to delete sauce %s: %s", sauce_id, exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="Sauce deleted !")


@router.post("/{sauce_id}/like", response_model=MessageResponse)
async def react_to_sauce(
    sauce_id: str,
    payload: ReactionRequest,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: SauceService = Depends(get_sauce_service),
) -> MessageResponse:
    try:
        _, reaction = await run_in_threadpool(service.react, sauce_id, user.id, payload.like)
    except InvalidReactionValue:
        raise HTTPException(status_code=400, detail="Unknown reaction type")
    except NothingToRemove as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except AlreadyReacted as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ConflictingReaction as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SauceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=500, detail=str(exc))

    if reaction == Reaction.NEUTRAL:
        response.status_code = status.HTTP_200_OK
        return MessageResponse(message="Reaction deleted !")
    response.status_code = status.HTTP_201_CREATED
    return MessageResponse(message="Reaction created !")
