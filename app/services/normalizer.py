from typing import List

from app.schemas.blog import ContentBlock, PostDetail, PostPage, PostSummary
from app.schemas.prismic import PrismicDocument, PrismicSearchResponse
from app.services.rich_text import as_html, as_text

SUMMARY_FIELDS = ["posts.title", "posts.subtitle", "posts.author"]


def to_summary(doc: PrismicDocument) -> PostSummary:
    data = doc.data
    return PostSummary(
        slug=doc.uid or doc.id,
        first_publication_date=doc.first_publication_date,
        title=data.get("title") or "",
        subtitle=data.get("subtitle") or "",
        author=data.get("author") or "",
    )


def to_detail(doc: PrismicDocument) -> PostDetail:
    summary = to_summary(doc)
    banner = doc.data.get("banner") or {}
    return PostDetail(
        **summary.model_dump(),
        last_publication_date=doc.last_publication_date,
        banner_url=banner.get("url"),
        content=_to_blocks(doc.data.get("content") or []),
    )


def to_page(response: PrismicSearchResponse) -> PostPage:
    return PostPage(
        next_page=response.next_page,
        results=[to_summary(doc) for doc in response.results],
    )


def _to_blocks(raw_blocks: List[dict]) -> List[ContentBlock]:
    return [
        ContentBlock(
            heading=item.get("heading") or "",
            body_text=as_text(item.get("body")),
            body_html=as_html(item.get("body")),
        )
        for item in raw_blocks
    ]
