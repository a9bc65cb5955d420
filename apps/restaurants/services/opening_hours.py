"""
Opening hours parsing.

Schedules are stored as plain strings such as::

    "Mon, Weds 5:45 am - 12:30 am / Tues-Fri 11 am - 9 pm / Sun 10 am - 2 pm"

Segments are separated by ``/``. Each segment lists days (names,
abbreviations or ``A-B`` ranges, comma separated) followed by an
``open - close`` time range. A close time that is not after the open time
means the restaurant stays open past midnight into the next day.
"""

from datetime import datetime, time
from typing import List, NamedTuple, Union
import re

from .exceptions import InvalidOpeningHoursError


DAY_ALIASES = {
    'mon': 0, 'monday': 0,
    'tue': 1, 'tues': 1, 'tuesday': 1,
    'wed': 2, 'weds': 2, 'wednesday': 2,
    'thu': 3, 'thur': 3, 'thurs': 3, 'thursday': 3,
    'fri': 4, 'friday': 4,
    'sat': 5, 'saturday': 5,
    'sun': 6, 'sunday': 6,
}

_TIME = r'\d{1,2}(?::\d{2})?\s*[ap]\.?m\.?'
_SEGMENT_RE = re.compile(
    rf'^(?P<days>[a-z][a-z ,\-]*?)\s+(?P<opens>{_TIME})\s*-\s*(?P<closes>{_TIME})$',
    re.IGNORECASE,
)
_TIME_RE = re.compile(r'^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<meridiem>[ap])\.?m\.?$', re.IGNORECASE)


class OpeningPeriod(NamedTuple):
    """One weekday's opening window; ``closes <= opens`` spans midnight."""

    weekday: int
    opens: time
    closes: time

    @property
    def overnight(self) -> bool:
        return self.closes <= self.opens


def parse_time(text: str) -> time:
    """
    Parse a 12-hour clock time such as ``11 am`` or ``2:30 pm``.

    Raises:
        InvalidOpeningHoursError: If the text is not a valid time
    """
    match = _TIME_RE.match(text.strip())
    if not match:
        raise InvalidOpeningHoursError(f"Invalid time '{text}'")

    hour = int(match.group('hour'))
    minute = int(match.group('minute') or 0)
    if not 1 <= hour <= 12 or minute > 59:
        raise InvalidOpeningHoursError(f"Invalid time '{text}'")

    hour = hour % 12
    if match.group('meridiem').lower() == 'p':
        hour += 12
    return time(hour, minute)


def _parse_day(text: str) -> int:
    key = text.strip().lower().rstrip('.')
    if key not in DAY_ALIASES:
        raise InvalidOpeningHoursError(f"Unknown day '{text.strip()}'")
    return DAY_ALIASES[key]


def parse_days(text: str) -> List[int]:
    """
    Parse a day list such as ``Mon, Weds`` or ``Tues-Fri`` into weekday numbers.

    Ranges are inclusive and may wrap around the week (``Fri-Mon``).
    """
    days = []
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        if '-' in part:
            start_text, end_text = part.split('-', 1)
            start, end = _parse_day(start_text), _parse_day(end_text)
            span = (end - start) % 7
            days.extend((start + offset) % 7 for offset in range(span + 1))
        else:
            days.append(_parse_day(part))

    if not days:
        raise InvalidOpeningHoursError(f"No days in '{text}'")
    return days


def parse_opening_hours(text: str) -> List[OpeningPeriod]:
    """
    Parse an opening hours string into weekday periods.

    Args:
        text: Schedule string; blank means no opening hours

    Returns:
        List of OpeningPeriod, one per weekday and segment

    Raises:
        InvalidOpeningHoursError: If any segment cannot be parsed
    """
    periods = []
    if not text or not text.strip():
        return periods

    for segment in text.split('/'):
        segment = segment.strip()
        if not segment:
            continue

        match = _SEGMENT_RE.match(segment)
        if not match:
            raise InvalidOpeningHoursError(f"Cannot parse opening hours segment '{segment}'")

        opens = parse_time(match.group('opens'))
        closes = parse_time(match.group('closes'))
        for weekday in parse_days(match.group('days')):
            periods.append(OpeningPeriod(weekday, opens, closes))

    return periods


def is_open_at(opening_hours: Union[str, List[OpeningPeriod]], moment: datetime) -> bool:
    """
    Check whether a schedule covers the given moment.

    The moment's wall-clock weekday and time are compared directly against
    the schedule.

    Args:
        opening_hours: Schedule string or already parsed periods
        moment: Point in time to check

    Returns:
        True if any period is open at ``moment``
    """
    if isinstance(opening_hours, str):
        periods = parse_opening_hours(opening_hours)
    else:
        periods = opening_hours

    weekday = moment.weekday()
    previous_day = (weekday - 1) % 7
    now = moment.time().replace(tzinfo=None)

    for period in periods:
        if period.overnight:
            if period.weekday == weekday and now >= period.opens:
                return True
            if period.weekday == previous_day and now < period.closes:
                return True
        elif period.weekday == weekday and period.opens <= now < period.closes:
            return True

    return False
