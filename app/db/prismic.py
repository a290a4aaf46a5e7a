import logging
from typing import Iterable, Optional

import httpx

from app.exceptions import ContentBackendError, InvalidCursorError
from app.schemas.prismic import PrismicApi, PrismicDocument, PrismicSearchResponse
from app.settings import settings

logger = logging.getLogger(__name__)


def at(fragment: str, value: str) -> str:
    """Build an `at` predicate, e.g. [at(document.type, "posts")]."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[at({fragment}, "{escaped}")]'


class PrismicClient:
    def __init__(self, http: httpx.AsyncClient, endpoint: str, access_token: str = ""):
        self.http = http
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self._master_ref: Optional[str] = None

    @property
    def search_url(self) -> str:
        return f"{self.endpoint}/documents/search"

    async def get_master_ref(self) -> str:
        if self._master_ref is None:
            api = PrismicApi(**await self._get_json(self.endpoint, self._auth()))
            if not api.master_ref:
                raise ContentBackendError("Content API did not return a master ref")
            self._master_ref = api.master_ref
        return self._master_ref

    async def query(
        self,
        predicates: Iterable[str],
        *,
        ref: Optional[str] = None,
        fetch: Optional[Iterable[str]] = None,
        page_size: Optional[int] = None,
        orderings: Optional[str] = None,
        after: Optional[str] = None,
    ) -> PrismicSearchResponse:
        params = {
            "ref": ref or await self.get_master_ref(),
            "q": f"[{''.join(predicates)}]",
            **self._auth(),
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if page_size is not None:
            params["pageSize"] = page_size
        if orderings:
            params["orderings"] = orderings
        if after:
            params["after"] = after

        return PrismicSearchResponse(**await self._get_json(self.search_url, params))

    async def get_by_uid(
        self, doc_type: str, uid: str, *, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        response = await self.query(
            [at(f"my.{doc_type}.uid", uid)], ref=ref, page_size=1
        )
        return response.results[0] if response.results else None

    async def get_by_id(
        self, doc_id: str, *, ref: Optional[str] = None
    ) -> Optional[PrismicDocument]:
        response = await self.query([at("document.id", doc_id)], ref=ref, page_size=1)
        return response.results[0] if response.results else None

    async def fetch_page(self, url: str) -> PrismicSearchResponse:
        """Follow an opaque next_page URL handed out by a previous search."""
        if not url.startswith(self.search_url):
            raise InvalidCursorError(f"Cursor does not point at {self.search_url}")
        return PrismicSearchResponse(**await self._get_json(url))

    def _auth(self) -> dict:
        return {"access_token": self.access_token} if self.access_token else {}

    async def _get_json(self, url: str, params: Optional[dict] = None) -> dict:
        try:
            response = await self.http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Content API answered {e.response.status_code} for {url}")
            raise ContentBackendError(
                f"Content API error: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Content API request failed for {url}: {e}")
            raise ContentBackendError(f"Content API unreachable: {e}") from e


async def get_prismic():
    """
    Yield a content API client bound to a fresh HTTP connection pool.
    Called at runtime to avoid import-time connections.
    """
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as http:
        yield PrismicClient(
            http, settings.PRISMIC_API_ENDPOINT, settings.PRISMIC_ACCESS_TOKEN
        )
