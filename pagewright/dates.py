"""
Publish/update dates: parsing, "Month YYYY" display and the date block.

Dates are ISO-8601-like strings:

  2021-03-01
  2021-03-01T09:30
  2021-03-01T09:30:15.123Z
  2021-03-01T09:30:15.123456+01:00

They are always displayed in GMT, so a time late on the last day of a month
in a zone east of Greenwich can display as the previous month.
"""
import re
from datetime import date, datetime, timezone

from .errors import MalformedDescriptor

DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d{3}(?:\d{3})?)?)?(?:Z|[+-]\d{2}:\d{2})?)?$"
)


class InvalidDate(MalformedDescriptor, ValueError):
    def __init__(self, value, page=None):
        self.value = value
        super().__init__(f"invalid date: {value!r}", page)


def raw_date(value):
    """
    Normalise a descriptor date to its string form.

    YAML turns unquoted dates into date/datetime objects; those are converted
    back to ISO strings so the page keeps the date as authored.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def parse_date(value) -> datetime:
    """Parse a date string into an aware datetime in UTC."""
    text = raw_date(value)
    if text is None or not DATE_RE.match(text):
        raise InvalidDate(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as exc:
        # right shape, impossible calendar date (2021-02-30)
        raise InvalidDate(value) from exc
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_month_year(value) -> str:
    return parse_date(value).strftime("%B %Y")


def same_month_and_year(d1, d2) -> bool:
    """
    True when both dates fall in the same calendar month of the same year.

    2020-01-31 and 2020-01-01 are "close"; 2020-01-31 and 2020-02-01 are not.
    """
    return parse_date(d1).strftime("%m %Y") == parse_date(d2).strftime("%m %Y")


def date_block(published, updated=None):
    """
    Markup tree for the <time> element shown under a page title.

    Returns None when there is no published date. A revision in the same month
    as publication is not shown in the text, only in the tooltip.
    """
    published = raw_date(published)
    updated = raw_date(updated)
    if not published:
        return None

    if updated:
        title = f"{published} (rev. {updated})"
    else:
        title = published

    if updated and not same_month_and_year(published, updated):
        text = f"{format_month_year(published)}&ensp;(rev. {format_month_year(updated)})"
    else:
        text = format_month_year(published)

    return ["time", {"class": "date", "title": title, "datetime": published}, text]
