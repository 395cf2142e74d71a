from datetime import datetime, timedelta, timezone
from typing import Optional
from metar_decoder.errors import InvalidDate

RECORD_DATE_FORMAT = "%Y/%m/%d %H:%M"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_record_date(date_line: str) -> datetime:
    """Parse the ``YYYY/MM/DD HH:MM`` line that precedes a report in NOAA files."""
    try:
        parsed = datetime.strptime((date_line or "").strip(), RECORD_DATE_FORMAT)
    except ValueError as e:
        raise InvalidDate(f"invalid record date {date_line!r}: {e}") from e
    return parsed.replace(tzinfo=timezone.utc)


def resolve_observation_time(token: str, now: Optional[datetime] = None) -> datetime:
    """Resolve a ``DDHHMMZ`` token against ``now``.

    The report only carries day, hour and minute. Year and month come from
    ``now``; when the reported day is later than today the anchor is first
    stepped back by a single day, so a report from the 30th read on the 1st
    lands in the previous month. A day past the end of the anchor month
    carries over into the next one (the 31st of April is the 1st of May).
    Raises ValueError for a malformed token or an out-of-range hour or minute.
    """
    if len(token) != 7 or not token.endswith("Z") or not token[:6].isdigit():
        raise ValueError("expected DDHHMMZ")

    day = int(token[0:2])
    hour = int(token[2:4])
    minute = int(token[4:6])

    anchor = now or utc_now()
    if anchor.tzinfo is None:
        anchor = anchor.replace(tzinfo=timezone.utc)
    else:
        anchor = anchor.astimezone(timezone.utc)

    if day > anchor.day:
        anchor = anchor - timedelta(days=1)

    first_of_month = anchor.replace(day=1, hour=hour, minute=minute, second=0, microsecond=0)
    return first_of_month + timedelta(days=day - 1)
