"""Profile and profile photo endpoints."""
import logging

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import (
    get_app_context,
    get_current_user,
    get_photo_uploader,
    get_user_repository,
)
from core.context import AppContext
from core.storage import build_photo_name
from db.user_repository import UserRepository
from schemas.user import PhotoUploadResponse, UserResponse
from services.exceptions import NotFoundError, ValidationError
from services.token_service import TokenClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
async def get_profile(
    current_user: TokenClaims = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Get the authenticated user's profile."""
    user = await users.get_by_id(current_user.id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    return UserResponse.model_validate(user)


@router.post("/photo", response_model=PhotoUploadResponse)
async def upload_photo(
    photo: UploadFile | None = File(default=None),
    uploader: TokenClaims | None = Depends(get_photo_uploader),
    context: AppContext = Depends(get_app_context),
) -> PhotoUploadResponse:
    """
    Upload a profile photo (multipart field ``photo``) and return its public URL.

    Authentication is required only when PHOTO_UPLOAD_REQUIRES_AUTH is set.
    """
    if photo is None or not photo.filename:
        raise ValidationError("Nenhum arquivo enviado")

    content = await photo.read()
    name = build_photo_name(photo.filename)
    url = await context.photos.upload(
        name,
        content,
        photo.content_type or "application/octet-stream",
    )
    logger.info(
        "profile_photo_uploaded name=%s size=%s user_id=%s",
        name,
        len(content),
        uploader.id if uploader else None,
    )
    return PhotoUploadResponse(url=url)
