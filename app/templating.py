from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.services.posts_service import truncate_title
from app.settings import settings
from app.utils import format_date, format_date_time

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["format_date"] = format_date
templates.env.filters["format_date_time"] = format_date_time
templates.env.filters["truncate_title"] = truncate_title
templates.env.globals["site_name"] = settings.SITE_NAME


def render_page(name: str, **context) -> str:
    """Render a template to a string so it can be stored in the page cache."""
    context.setdefault("preview", False)
    return templates.get_template(name).render(**context)
