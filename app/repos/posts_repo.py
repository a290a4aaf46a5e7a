from typing import Optional

from app.db.prismic import at
from app.schemas.prismic import PrismicDocument, PrismicSearchResponse
from app.services.normalizer import SUMMARY_FIELDS

POST_TYPE = "posts"
LISTING_ORDER = "[document.last_publication_date desc]"
PUBLICATION_ORDER = "[document.first_publication_date]"
PUBLICATION_ORDER_DESC = "[document.first_publication_date desc]"


class PrismicPostsRepo:
    def __init__(self, client):
        self.client = client

    async def list_posts_page(
        self, page_size: int, ref: Optional[str] = None
    ) -> PrismicSearchResponse:
        return await self.client.query(
            [at("document.type", POST_TYPE)],
            ref=ref,
            fetch=SUMMARY_FIELDS,
            page_size=page_size,
            orderings=LISTING_ORDER,
        )

    async def next_posts_page(self, cursor: str) -> PrismicSearchResponse:
        return await self.client.fetch_page(cursor)

    async def get_post_doc(
        self, slug: str, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        return await self.client.get_by_uid(POST_TYPE, slug, ref=ref)

    async def get_doc_by_id(
        self, doc_id: str, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        return await self.client.get_by_id(doc_id, ref=ref)

    async def get_previous_doc(
        self, doc_id: str, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        return await self._neighbour(doc_id, PUBLICATION_ORDER_DESC, ref)

    async def get_next_doc(
        self, doc_id: str, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        return await self._neighbour(doc_id, PUBLICATION_ORDER, ref)

    async def _neighbour(
        self, doc_id: str, orderings: str, ref: Optional[str]
    ) -> Optional[PrismicDocument]:
        response = await self.client.query(
            [at("document.type", POST_TYPE)],
            ref=ref,
            fetch=SUMMARY_FIELDS,
            page_size=1,
            orderings=orderings,
            after=doc_id,
        )
        return response.results[0] if response.results else None
