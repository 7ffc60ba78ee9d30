"""Life-month arithmetic anchored to a birth date.

A unit is the interval ``[birth + N months, birth + N + 1 months)``. Its length
follows the calendar, so units anchored on the 31st are shorter in February.
"""

from __future__ import annotations

import calendar
import datetime as dt
import logging

LOGGER = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def parse_birth_date(value: object) -> dt.date | None:
    """Return the calendar date for ``value`` or ``None`` when it is unusable."""

    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        LOGGER.debug("birth date has unsupported type %s", type(value).__name__)
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        LOGGER.debug("unparseable birth date %r", value)
        return None


def add_units(anchor: dt.date, count: int) -> dt.date:
    month_index = anchor.month - 1 + count
    year = anchor.year + month_index // MONTHS_PER_YEAR
    month = month_index % MONTHS_PER_YEAR + 1
    last_day = calendar.monthrange(year, month)[1]
    return dt.date(year, month, min(anchor.day, last_day))


def unit_bounds(birth: dt.date, index: int) -> tuple[dt.datetime, dt.datetime]:
    """Start and end instants (local midnight) of unit ``index``."""

    start = dt.datetime.combine(add_units(birth, index), dt.time.min)
    end = dt.datetime.combine(add_units(birth, index + 1), dt.time.min)
    return start, end


def full_units_lived(dob: object, now: dt.datetime | None = None) -> int:
    birth = parse_birth_date(dob)
    if birth is None:
        return 0
    today = _wall_clock(now).date()
    units = (today.year - birth.year) * MONTHS_PER_YEAR + (today.month - birth.month)
    # the unit that started this month is still running
    if today.day < birth.day:
        units -= 1
    return max(units, 0)


def current_unit_progress(dob: object, now: dt.datetime | None = None) -> float:
    """Fraction of the running unit that has elapsed, clamped to ``[0, 1]``."""

    birth = parse_birth_date(dob)
    if birth is None:
        return 0.0
    now = _wall_clock(now)
    lived = full_units_lived(birth, now=now)
    try:
        start, end = unit_bounds(birth, lived)
    except (OverflowError, ValueError):
        LOGGER.debug("unit %d of %s is outside the supported calendar", lived, birth)
        return 0.0
    elapsed = (now - start).total_seconds()
    duration = (end - start).total_seconds()
    return min(max(elapsed / duration, 0.0), 1.0)


def _wall_clock(now: dt.datetime | None) -> dt.datetime:
    if now is None:
        return dt.datetime.now()
    if now.tzinfo is not None:
        return now.replace(tzinfo=None)
    return now
