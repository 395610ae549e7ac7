from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    # Keep naive UTC timestamps to match existing DB column types/semantics.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def week_start(d: date) -> date:
    """
    Monday of the week containing ``d``.

    Weeks start on Monday; a Sunday belongs to the week that began six days
    earlier, never to the following one.
    """
    return d - timedelta(days=d.weekday())


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month."""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def euros_to_cents(amount) -> int:
    return int(round(float(amount) * 100))


def cents_to_euros(cents: int | None) -> float:
    return round((cents or 0) / 100, 2)
