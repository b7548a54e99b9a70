# apps/api/turnus/services/shift_time.py
"""
Shift time resolution.

A shift is keyed by a calendar date but stored with absolute start/end
timestamps. The end is pushed to the next calendar day when the shift type
crosses midnight, or when the literal end time is not after the start time
(e.g. 23:00-01:00 typed against a type that is not flagged).

Every code path that writes shift times goes through ``resolve_shift_times``.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Tuple

from turnus.core.exceptions import ValidationError

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValidationError("Invalid date format")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format")


def parse_time(value: str) -> time:
    if not isinstance(value, str) or not TIME_RE.match(value):
        raise ValidationError("Invalid time format")
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        raise ValidationError("Invalid time format")


def resolve_shift_times(
    day: str | date,
    start_time: str,
    end_time: str,
    crosses_midnight: bool,
) -> Tuple[datetime, datetime]:
    d = parse_date(day)
    start = datetime.combine(d, parse_time(start_time))
    end = datetime.combine(d, parse_time(end_time))
    if crosses_midnight or end <= start:
        end = end + timedelta(days=1)
    return start, end
