from typing import Optional

from fastapi import Depends, Request

from app.db.base import get_db
from app.db.prismic import get_prismic
from app.repos.posts_repo import PrismicPostsRepo
from app.services.comments import CommentsWidget
from app.services.page_cache import PageCacheService
from app.services.page_generator import PageGenerator
from app.services.posts_service import PostsService
from app.settings import Settings, settings

page_generator = PageGenerator(settings.REVALIDATE_SECONDS)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(client=Depends(get_prismic)):
    return PrismicPostsRepo(client)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(repo=repo, page_size=current_settings.POSTS_PAGE_SIZE)


def get_page_cache(db=Depends(get_db)):
    return PageCacheService(db)


def get_page_generator() -> PageGenerator:
    return page_generator


def get_comments_widget(current_settings: Settings = Depends(get_settings)):
    return CommentsWidget(
        repo=current_settings.UTTERANCES_REPO, theme=current_settings.UTTERANCES_THEME
    )


def get_preview_ref(
    request: Request, current_settings: Settings = Depends(get_settings)
) -> Optional[str]:
    return request.cookies.get(current_settings.PREVIEW_COOKIE_NAME) or None
