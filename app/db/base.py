from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.settings import settings

# sqlite connections are shared between the event loop and the threadpool
connect_args = {"check_same_thread": False} if settings.is_sqlite_cache else {}

engine = create_engine(
    settings.PAGE_CACHE_URL, future=True, echo=False, connect_args=connect_args
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=engine) -> None:
    from app.models import generated_page  # noqa: F401  registers the table

    Base.metadata.create_all(bind=bind)
