from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    first_publication_date: Optional[str] = None
    title: str
    subtitle: str = ""
    author: str = ""


class ContentBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str = ""
    body_text: str = ""
    body_html: str = ""


class PostDetail(PostSummary):
    last_publication_date: Optional[str] = None
    banner_url: Optional[str] = None
    content: List[ContentBlock] = Field(default_factory=list)


class PostPage(BaseModel):
    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)


class PostNavigation(BaseModel):
    previous: Optional[PostSummary] = None
    next: Optional[PostSummary] = None


class PostView(BaseModel):
    """Everything the detail template needs for one post."""

    post: PostDetail
    reading_time: str
    edited: bool = False
    navigation: PostNavigation = Field(default_factory=PostNavigation)
