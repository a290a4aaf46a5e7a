import logging
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.schemas.blog import PostPage, PostSummary

logger = logging.getLogger(__name__)


class ListingState(BaseModel):
    """Accumulated posts plus the cursor to the next backend page."""

    model_config = ConfigDict(frozen=True)

    posts: Tuple[PostSummary, ...] = ()
    next_page: Optional[str] = None
    request_token: int = 0

    @classmethod
    def from_page(cls, page: PostPage) -> "ListingState":
        return cls(posts=tuple(page.results), next_page=page.next_page)

    @property
    def can_load_more(self) -> bool:
        return bool(self.next_page)


def begin_load(state: ListingState) -> Tuple[ListingState, int]:
    token = state.request_token + 1
    return state.model_copy(update={"request_token": token}), token


def apply_page(
    state: ListingState, page: PostPage, token: Optional[int] = None
) -> ListingState:
    """Append a fetched page; responses for superseded requests are dropped."""
    if token is not None and token != state.request_token:
        logger.info(f"Discarding stale page for request {token}")
        return state
    return state.model_copy(
        update={
            "posts": state.posts + tuple(page.results),
            "next_page": page.next_page,
        }
    )


class PostListing:
    def __init__(self, service, state: ListingState):
        self.service = service
        self.state = state

    async def load_more(self) -> ListingState:
        if not self.state.can_load_more:
            return self.state

        cursor = self.state.next_page
        self.state, token = begin_load(self.state)
        page = await self.service.load_more(cursor)
        self.state = apply_page(self.state, page, token)
        return self.state
