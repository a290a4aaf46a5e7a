import threading

from app.schemas.blog import PostPage
from app.schemas.prismic import PrismicDocument, PrismicSearchResponse

API_ENDPOINT = "https://blog.cdn.prismic.io/api/v2"
SEARCH_URL = f"{API_ENDPOINT}/documents/search"
MASTER_REF = "master-ref"


def make_doc(uid: str, **overrides) -> PrismicDocument:
    """Build a posts document the way the content API returns it."""
    data = {
        "title": f"Title {uid}",
        "subtitle": f"Subtitle {uid}",
        "author": "Joseph Oliveira",
        "banner": {"url": f"https://images.prismic.io/{uid}.png"},
        "content": [
            {
                "heading": "Intro",
                "body": [{"type": "paragraph", "text": "Hello world", "spans": []}],
            }
        ],
    }
    data.update(overrides.pop("data", {}))
    fields = {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "posts",
        "first_publication_date": "2021-03-15T19:25:28+0000",
        "last_publication_date": "2021-03-15T19:25:28+0000",
        "data": data,
    }
    fields.update(overrides)
    return PrismicDocument(**fields)


def make_search_response(docs, next_page=None) -> PrismicSearchResponse:
    return PrismicSearchResponse(
        page=1,
        results_per_page=len(docs),
        total_results_size=len(docs),
        total_pages=1,
        next_page=next_page,
        results=list(docs),
    )


class FakeRepo:
    """
    Minimal posts repo stand-in used in service tests.
    `pages` maps a cursor URL to the response returned for it.
    """

    def __init__(self, docs=None, pages=None, first_page=None):
        self.docs = list(docs or [])
        self.pages = pages or {}
        self.first_page = first_page
        self.calls = []

    async def list_posts_page(self, page_size, ref=None):
        self.calls.append(("list", page_size, ref))
        if self.first_page is not None:
            return self.first_page
        return make_search_response(self.docs[:page_size])

    async def next_posts_page(self, cursor):
        self.calls.append(("next", cursor))
        return self.pages[cursor]

    async def get_post_doc(self, slug, ref=None):
        self.calls.append(("get", slug, ref))
        return next((doc for doc in self.docs if doc.uid == slug), None)

    async def get_doc_by_id(self, doc_id, ref=None):
        self.calls.append(("get_by_id", doc_id, ref))
        return next((doc for doc in self.docs if doc.id == doc_id), None)

    async def get_previous_doc(self, doc_id, ref=None):
        self.calls.append(("previous", doc_id, ref))
        return self._neighbour(doc_id, -1)

    async def get_next_doc(self, doc_id, ref=None):
        self.calls.append(("next_doc", doc_id, ref))
        return self._neighbour(doc_id, 1)

    def _neighbour(self, doc_id, step):
        ordered = sorted(self.docs, key=lambda d: d.first_publication_date or "")
        index = next(i for i, doc in enumerate(ordered) if doc.id == doc_id)
        target = index + step
        if 0 <= target < len(ordered):
            return ordered[target]
        return None


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        pages=None,
        preview_path="/",
    ):
        self._list_posts_return = list_posts_return or PostPage()
        self._get_post_return = get_post_return
        self.pages = pages or {}
        self.preview_path = preview_path
        self.calls = []

    async def list_posts(self, ref=None):
        self.calls.append(("list", ref))
        return self._list_posts_return

    async def load_more(self, cursor):
        self.calls.append(("more", cursor))
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page

    async def get_post(self, slug, ref=None):
        self.calls.append(("get", slug, ref))
        return self._get_post_return

    async def resolve_preview_path(self, document_id, ref=None):
        self.calls.append(("preview", document_id, ref))
        return self.preview_path


class FakePageCache:
    """
    In-memory stand-in for PageCacheService.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.stored = []
        self.threads = []

    def get(self, path):
        self.threads.append(threading.get_ident())
        return self.pages.get(path)

    def store(self, path, html, now=None):
        self.threads.append(threading.get_ident())
        from app.models.generated_page import GeneratedPage
        from app.services.page_cache import _utcnow

        page = GeneratedPage(path=path, html=html, generated_at=now or _utcnow())
        self.pages[path] = page
        self.stored.append(path)
        return page
