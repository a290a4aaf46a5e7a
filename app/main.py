import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.db.base import init_db
from app.routers import posts, preview
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="spacetraveling", description="Blog front-end for a headless CMS")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Page cache ready")
    yield


app.router.lifespan_context = lifespan

app.include_router(preview.router)
app.include_router(posts.router)
