"""
Calendar engine.

Maps a reference instant (plus an optional IANA zone name) to the year's
day count and the number of days already elapsed. Day-of-year comes from
the calendar date components, never from elapsed wall-clock time, so a
daylight-saving shift cannot move a date into the neighbouring day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from yeardots.errors import InvalidTimeZone

logger = logging.getLogger(__name__)

Instant = Union[datetime, date]


# ─────────────────────────── Types ────────────────────────────

@dataclass(frozen=True)
class YearProgress:
    """
    Snapshot of how far through its calendar year a date is.

    year:    Calendar year of the reference date
    total:   Days in that year (365 or 366)
    filled:  Days elapsed, including the reference date itself
    percent: filled / total as a percentage, one fractional digit
    """
    year: int
    total: int
    filled: int
    percent: str

    @property
    def remaining(self) -> int:
        return self.total - self.filled

    @property
    def header_text(self) -> str:
        return f"{self.filled}/{self.total}"

    @property
    def percent_text(self) -> str:
        return f"{self.percent}%"

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "total": self.total,
            "filled": self.filled,
            "percent": self.percent,
        }


# ─────────────────────────── Calendar math ────────────────────

def is_leap_year(year: int) -> bool:
    """Gregorian rule: every 4th year, except centuries not divisible by 400."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(year: int, month: int, day: int) -> int:
    """1-indexed ordinal of a calendar date within its year."""
    return date(year, month, day).toordinal() - date(year, 1, 1).toordinal() + 1


def format_percent(filled: int, total: int) -> str:
    """
    Format filled / total * 100 with exactly one fractional digit.

    Decimal arithmetic keeps the rounding half-away-from-zero; the float
    formatting mini-language would round half-to-even on exact ties.
    """
    if total <= 0:
        raise ValueError("total must be positive")
    value = Decimal(filled * 100) / Decimal(total)
    return str(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def load_zone(time_zone: str) -> ZoneInfo:
    """Look up an IANA zone, raising InvalidTimeZone for unknown names."""
    try:
        return ZoneInfo(time_zone)
    # Names of tzdata directories ("Europe") surface as IsADirectoryError.
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimeZone(time_zone) from exc


def resolve_calendar_date(now: Instant, time_zone: Optional[str] = None) -> date:
    """
    Reduce a reference instant to the calendar date it falls on.

    Args:
        now:       Aware or naive datetime, or a plain date. Naive values
                   are interpreted as local time.
        time_zone: IANA zone name. Empty or None means local time.

    Returns:
        The calendar date in the requested zone.
    """
    zone = load_zone(time_zone) if time_zone else None

    if not isinstance(now, datetime):
        return now

    if zone is not None:
        return now.astimezone(zone).date()
    if now.tzinfo is not None:
        return now.astimezone().date()
    return now.date()


def compute_year_progress(
    now: Optional[Instant] = None, time_zone: Optional[str] = None
) -> YearProgress:
    """
    Compute the year progress for ``now`` (default: the current moment).

    Raises:
        InvalidTimeZone: ``time_zone`` is non-empty and not a known zone.
    """
    if now is None:
        now = datetime.now()

    current = resolve_calendar_date(now, time_zone)
    total = days_in_year(current.year)
    filled = min(day_of_year(current.year, current.month, current.day), total)

    progress = YearProgress(
        year=current.year,
        total=total,
        filled=filled,
        percent=format_percent(filled, total),
    )
    logger.debug("Progress for %s (%s): %s", current, time_zone or "local", progress)
    return progress
