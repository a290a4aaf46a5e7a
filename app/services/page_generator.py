import logging
from typing import Awaitable, Callable, Optional, Set

from starlette.concurrency import run_in_threadpool

from app.exceptions import GenerationInProgress
from app.services.page_cache import PageCacheService, is_fresh

logger = logging.getLogger(__name__)


class PageGenerator:
    """
    Lazily generates pages and keeps them in the page cache.

    A cached page is served until it is older than `max_age_seconds`, after
    which the next request regenerates it. Only one generation per path runs
    at a time: concurrent requests get the stale copy when there is one, or
    GenerationInProgress when the page has never been built. A failed
    regeneration keeps serving the stale copy; only first builds raise.
    """

    def __init__(self, max_age_seconds: int):
        self.max_age_seconds = max_age_seconds
        self._generating: Set[str] = set()

    def is_generating(self, path: str) -> bool:
        return path in self._generating

    async def get_or_generate(
        self,
        path: str,
        build: Callable[[], Awaitable[Optional[str]]],
        cache: PageCacheService,
    ) -> Optional[str]:
        # the cache is backed by a blocking session, keep it off the event loop
        cached = await run_in_threadpool(cache.get, path)
        if is_fresh(cached, self.max_age_seconds):
            return cached.html

        if self.is_generating(path):
            if cached is not None:
                return cached.html
            raise GenerationInProgress(path)

        self._generating.add(path)
        try:
            logger.info(f"Generating page {path}")
            html = await build()
        except Exception as e:
            if cached is None:
                raise
            logger.warning(f"Regenerating {path} failed, serving stale copy: {e}")
            return cached.html
        finally:
            self._generating.discard(path)

        if html is not None:
            await run_in_threadpool(cache.store, path, html)
        return html
