from typing import Optional

import pendulum

from app.settings import settings


def format_date(value: Optional[str], locale: Optional[str] = None) -> str:
    if not value:
        return ""
    return pendulum.parse(value).format("D MMM YYYY", locale=locale or settings.DATE_LOCALE)


def format_date_time(value: Optional[str], locale: Optional[str] = None) -> str:
    if not value:
        return ""
    return pendulum.parse(value).format(
        "D MMM YYYY, [às] HH:mm", locale=locale or settings.DATE_LOCALE
    )
