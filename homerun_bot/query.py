"""Search query construction for Home Run Bot."""

from datetime import UTC, date, datetime, tzinfo

from dateutil import tz

# "Today's home runs" follows the audience's day, not UTC or the host's clock
REFERENCE_TIMEZONE = tz.gettz("America/Los_Angeles")

DEFAULT_CATEGORY = "Home Run"


def today_in(zone: tzinfo, now: datetime | None = None) -> date:
    """Return the calendar date of `now` in `zone`.

    Naive datetimes are treated as UTC.
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(zone).date()


def build_search_query(
    now: datetime | None = None,
    zone: tzinfo = REFERENCE_TIMEZONE,
    category: str = DEFAULT_CATEGORY,
) -> str:
    """Build the query for the latest highlight of `category` today.

    Args:
        now: Current instant (defaults to the wall clock)
        zone: Timezone in which "today" is computed
        category: Hit result to filter on

    Returns:
        Query string filtered by category and date, newest first
    """
    day = today_in(zone, now)
    return (
        f'HitResult = ["{category}"] AND Date = ["{day.isoformat()}"] '
        "Order By Timestamp DESC"
    )
