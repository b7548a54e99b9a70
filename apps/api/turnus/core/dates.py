# apps/api/turnus/core/dates.py
from __future__ import annotations

from datetime import date, datetime, timedelta

import pytz

from turnus.core.config import settings

UTC = pytz.UTC


def utcnow() -> datetime:
    """Naive UTC timestamp, the form all audit columns are stored in."""
    return datetime.now(UTC).replace(tzinfo=None)


def today_local(tz_name: str | None = None) -> date:
    tz = pytz.timezone(tz_name or settings.TZ)
    return datetime.now(tz).date()


def week_bounds(d: date) -> tuple[date, date]:
    # Pazartesi .. Pazar
    start = d - timedelta(days=d.weekday())
    return start, start + timedelta(days=6)


def shift_hours(start: datetime, end: datetime) -> float:
    return round((end - start).total_seconds() / 3600, 2)
