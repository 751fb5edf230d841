"""Calendar-date helpers tied to the configured reference time zone."""

from datetime import UTC, date, datetime, time, timedelta, tzinfo

DATE_FORMAT = "%d/%m/%Y"


def as_utc(value: datetime) -> datetime:
    """Normalise a timestamp to aware UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(UTC)


def start_of_next_day(day: date, tz: tzinfo) -> datetime:
    """Exclusive upper bound covering the whole of ``day``."""
    return start_of_day(day + timedelta(days=1), tz)


def format_date(value: datetime | None, tz: tzinfo) -> str | None:
    if value is None:
        return None
    return as_utc(value).astimezone(tz).strftime(DATE_FORMAT)
