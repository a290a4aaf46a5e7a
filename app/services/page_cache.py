import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.generated_page import GeneratedPage


class PageCacheService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, path: str) -> Optional[GeneratedPage]:
        return self.db.get(GeneratedPage, path)

    def store(
        self, path: str, html: str, now: Optional[datetime.datetime] = None
    ) -> GeneratedPage:
        page = self.db.merge(
            GeneratedPage(path=path, html=html, generated_at=now or _utcnow())
        )
        self.db.commit()
        return page


def is_fresh(
    page: Optional[GeneratedPage],
    max_age_seconds: int,
    now: Optional[datetime.datetime] = None,
) -> bool:
    if page is None or page.generated_at is None:
        return False
    generated_at = page.generated_at
    # sqlite hands timestamps back without tzinfo
    if generated_at.tzinfo is None:
        generated_at = generated_at.replace(tzinfo=datetime.timezone.utc)
    age = (now or _utcnow()) - generated_at
    return age < datetime.timedelta(seconds=max_age_seconds)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
