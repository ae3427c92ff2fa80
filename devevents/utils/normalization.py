"""Pure normalization helpers for event and booking input.

These functions never touch the database, so the write-time rules (slug
derivation, date and time canonical forms, email shape, list decoding) can
be exercised on their own.
"""

import json
import re
import unicodedata
from datetime import date, datetime, timezone
from typing import List, Sequence, Union

SLUG_MAX_LENGTH = 100
SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
EMAIL_MAX_LENGTH = 320
TIME_PATTERN = re.compile(r'^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$')
SIMPLE_DATE_PATTERN = re.compile(r'^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$')

INVALID_DATE_MESSAGE = 'Invalid date format. Please provide a valid date.'
INVALID_TIME_MESSAGE = 'Invalid time format. Please use HH:MM format (e.g., 14:30).'

StringList = Union[str, Sequence[str]]


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a title.

    Lowercases, transliterates accented letters to ASCII, collapses every run
    of whitespace or punctuation into a single hyphen and strips hyphens from
    both ends. ``"React Conf 2025"`` becomes ``"react-conf-2025"``.
    """
    ascii_title = (
        unicodedata.normalize('NFKD', title)
        .encode('ascii', 'ignore')
        .decode('ascii')
    )
    return re.sub(r'[^a-z0-9]+', '-', ascii_title.lower()).strip('-')


def is_valid_slug(slug: str) -> bool:
    return 0 < len(slug) <= SLUG_MAX_LENGTH and bool(SLUG_PATTERN.match(slug))


def normalize_date(value: str) -> str:
    """Return ``value`` as a ``YYYY-MM-DD`` calendar date.

    Accepts ``YYYY-M-D`` style dates and ISO-8601 date-times. Aware
    date-times are converted to UTC before the date is taken.

    Raises:
        ValueError: If the value is not a recognizable date.
    """
    text = value.strip()
    match = SIMPLE_DATE_PATTERN.match(text)
    try:
        if match:
            year, month, day = (int(part) for part in match.groups())
            return date(year, month, day).isoformat()

        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        raise ValueError(INVALID_DATE_MESSAGE) from None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def normalize_time(value: str) -> str:
    """Return ``value`` as zero-padded 24-hour ``HH:MM``.

    Raises:
        ValueError: If the value is not ``H:MM`` or ``HH:MM`` within range.
    """
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(INVALID_TIME_MESSAGE)
    hours, minutes = match.groups()
    return f"{hours.zfill(2)}:{minutes}"


def normalize_email(value: str) -> str:
    return value.strip().lower()


def is_valid_email(value: str) -> bool:
    return len(value) <= EMAIL_MAX_LENGTH and bool(EMAIL_PATTERN.match(value))


def decode_string_list(value: StringList) -> List[str]:
    """Turn a list-or-string form value into a clean list of strings.

    A single string is first read as a JSON array and otherwise split on
    commas. Elements are trimmed and blank ones dropped.
    """
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            decoded = None

        if isinstance(decoded, list):
            items = [str(item) for item in decoded if item is not None]
        else:
            items = value.split(',')
    else:
        items = [str(item) for item in value]

    return [item.strip() for item in items if item.strip()]


def unique_in_order(items: Sequence[str]) -> List[str]:
    """Drop repeated items, keeping the first occurrence."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
