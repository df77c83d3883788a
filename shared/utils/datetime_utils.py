from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database.

    Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def format_visit_datetime(value: datetime | None) -> str:
    """e.g. 'Wednesday, January 01, 2025 at 09:00 AM'"""
    if value is None:
        return ""
    return value.strftime("%A, %B %d, %Y at %I:%M %p")
