import asyncio
import logging
import math
from typing import Iterable, Optional

import pendulum

from app.schemas.blog import ContentBlock, PostNavigation, PostPage, PostView
from app.services.normalizer import to_detail, to_page, to_summary
from app.services.rich_text import resolve_link

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
READING_TIME_PLACEHOLDER = "calculando..."
NAV_TITLE_MAX_LENGTH = 35
NAV_TITLE_KEEP = 33


class PostsService:
    def __init__(self, repo, page_size: int = 1):
        self.repo = repo
        self.page_size = page_size

    async def list_posts(self, ref: Optional[str] = None) -> PostPage:
        response = await self.repo.list_posts_page(self.page_size, ref=ref)
        return to_page(response)

    async def load_more(self, cursor: str) -> PostPage:
        response = await self.repo.next_posts_page(cursor)
        return to_page(response)

    async def get_post(self, slug: str, ref: Optional[str] = None) -> Optional[PostView]:
        doc = await self.repo.get_post_doc(slug, ref=ref)
        if not doc:
            logger.warning(f"No post found for slug {slug}")
            return None

        previous_doc, next_doc = await asyncio.gather(
            self.repo.get_previous_doc(doc.id, ref=ref),
            self.repo.get_next_doc(doc.id, ref=ref),
        )
        post = to_detail(doc)
        return PostView(
            post=post,
            reading_time=calculate_reading_time(post.content),
            edited=is_edited(post.first_publication_date, post.last_publication_date),
            navigation=PostNavigation(
                previous=to_summary(previous_doc) if previous_doc else None,
                next=to_summary(next_doc) if next_doc else None,
            ),
        )

    async def resolve_preview_path(
        self, document_id: Optional[str], ref: Optional[str] = None
    ) -> str:
        if not document_id:
            return "/"
        doc = await self.repo.get_doc_by_id(document_id, ref=ref)
        if not doc:
            return "/"
        return resolve_link({"link_type": "Document", "type": doc.type, "uid": doc.uid})


def count_words(blocks: Iterable[ContentBlock]) -> int:
    text = " ".join(f"{block.heading} {block.body_text}" for block in blocks)
    return len([word for word in text.split(" ") if word])


def calculate_reading_time(blocks: Iterable[ContentBlock]) -> str:
    words = count_words(blocks)
    if words == 0:
        return READING_TIME_PLACEHOLDER
    minutes = math.ceil(words / WORDS_PER_MINUTE)
    return f"{minutes} min"


def truncate_title(title: str) -> str:
    if len(title) > NAV_TITLE_MAX_LENGTH:
        return f"{title[:NAV_TITLE_KEEP]}..."
    return title


def is_edited(first_published: Optional[str], last_modified: Optional[str]) -> bool:
    if not first_published or not last_modified:
        return False
    return pendulum.parse(last_modified) > pendulum.parse(first_published)
