import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.exceptions import ContentBackendError, GenerationInProgress, InvalidCursorError
from app.schemas.blog import PostPage
from app.services.comments import CommentsWidget
from app.services.listing import ListingState, PostListing
from app.services.page_cache import PageCacheService
from app.services.page_generator import PageGenerator
from app.services.posts_service import PostsService
from app.settings import Settings
from app.templating import render_page

logger = logging.getLogger(__name__)

router = APIRouter()
MAX_LOAD_MORE = 50


@router.get("/", response_class=HTMLResponse)
async def home(
    more: int = Query(0, ge=0, le=MAX_LOAD_MORE),
    service: PostsService = Depends(deps.get_posts_service),
    preview_ref: Optional[str] = Depends(deps.get_preview_ref),
):
    """Post listing; `more` follows the pagination cursor that many times."""
    try:
        first_page = await service.list_posts(ref=preview_ref)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error generating post listing: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate page")

    listing = PostListing(service, ListingState.from_page(first_page))
    load_error = False
    for _ in range(more):
        if not listing.state.can_load_more:
            break
        try:
            await listing.load_more()
        except (ContentBackendError, InvalidCursorError) as e:
            logger.warning(f"Failed to load more posts: {e}")
            load_error = True
            break

    html = render_page(
        "home.html",
        listing=listing.state,
        more=more,
        load_error=load_error,
        preview=bool(preview_ref),
    )
    return HTMLResponse(html)


@router.get("/api/posts", response_model=PostPage)
async def more_posts(
    cursor: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Follow an opaque next_page cursor and return the normalized page."""
    try:
        return await service.load_more(cursor)
    except InvalidCursorError:
        raise HTTPException(status_code=400, detail="Invalid cursor")
    except ContentBackendError as e:
        logger.error(f"Failed to load more posts: {e}")
        raise HTTPException(status_code=502, detail="Failed to load more posts")


@router.get("/post/{slug}", response_class=HTMLResponse)
async def post_page(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    cache: PageCacheService = Depends(deps.get_page_cache),
    generator: PageGenerator = Depends(deps.get_page_generator),
    comments: CommentsWidget = Depends(deps.get_comments_widget),
    preview_ref: Optional[str] = Depends(deps.get_preview_ref),
    current_settings: Settings = Depends(deps.get_settings),
):
    async def build() -> Optional[str]:
        view = await service.get_post(slug, ref=preview_ref)
        if view is None:
            return None
        return render_page(
            "post.html", view=view, comments=comments, preview=bool(preview_ref)
        )

    try:
        if preview_ref:
            html = await build()
        else:
            html = await generator.get_or_generate(f"/post/{slug}", build, cache)
    except GenerationInProgress:
        return HTMLResponse(render_page("loading.html"))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error generating post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate page")

    if html is None:
        return HTMLResponse(render_page("not_found.html"), status_code=404)

    headers = (
        {}
        if preview_ref
        else {"Cache-Control": f"s-maxage={current_settings.REVALIDATE_SECONDS}"}
    )
    return HTMLResponse(html, headers=headers)
