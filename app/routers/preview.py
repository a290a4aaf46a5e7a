import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from app import dependencies as deps
from app.exceptions import ContentBackendError
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview")
async def enter_preview(
    token: str,
    documentId: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Store the preview ref and redirect to the previewed document."""
    try:
        path = await service.resolve_preview_path(documentId, ref=token)
    except ContentBackendError as e:
        logger.error(f"Failed to resolve preview for {documentId}: {e}")
        raise HTTPException(status_code=502, detail="Failed to resolve preview")

    response = RedirectResponse(path, status_code=307)
    response.set_cookie(
        current_settings.PREVIEW_COOKIE_NAME, token, httponly=True, samesite="lax"
    )
    return response


@router.get("/exit-preview")
def exit_preview(current_settings: Settings = Depends(deps.get_settings)):
    response = RedirectResponse("/", status_code=307)
    response.delete_cookie(current_settings.PREVIEW_COOKIE_NAME)
    return response
