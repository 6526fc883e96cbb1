"""Conversions between the API's ISO-8601 instants and what the forms and
tables show.

Form encodings are UTC, like ``Date.toISOString`` in a browser, so a value
read into an edit form and sent back lands on the same minute.
"""
from __future__ import annotations
import logging
import os
from datetime import datetime
from dateutil import tz
from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

_DISPLAY_TZ_NAME = os.getenv("CLINIC_DISPLAY_TZ", "UTC")
DISPLAY_TZ = tz.gettz(_DISPLAY_TZ_NAME)
if DISPLAY_TZ is None:
    logger.warning("Unknown CLINIC_DISPLAY_TZ %r, falling back to UTC", _DISPLAY_TZ_NAME)
    DISPLAY_TZ = tz.UTC


def parse_instant(value: str | datetime | None) -> datetime | None:
    """Parse an instant into an aware datetime. Naive values are taken as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = isoparse(str(value))
        except (ValueError, OverflowError):
            logger.debug("Unparseable instant %r", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def format_display(value: str | datetime | None, zone=None) -> str:
    """``2024-12-06T15:30:00.000Z`` -> ``Dec 6, 2024, 3:30 PM``."""
    instant = parse_instant(value)
    if instant is None:
        return NOT_AVAILABLE
    try:
        local = instant.astimezone(zone or DISPLAY_TZ)
    except OverflowError:
        # shifting the zone would leave the supported year range
        return NOT_AVAILABLE
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {meridiem}"


def to_date_input(value: str | None) -> str:
    """Calendar-date text for ``<input type="date">``."""
    if not value:
        return ""
    return str(value).split("T", 1)[0]


def to_datetime_local_input(value: str | datetime | None) -> str:
    """UTC date-and-minute text for ``<input type="datetime-local">``."""
    instant = parse_instant(value)
    if instant is None:
        return ""
    try:
        return instant.astimezone(tz.UTC).strftime("%Y-%m-%dT%H:%M")
    except OverflowError:
        return ""


def from_datetime_local_input(text: str | None) -> str:
    """Form text back to an ISO instant in UTC. Unparseable text passes through."""
    if not text:
        return ""
    instant = parse_instant(text)
    if instant is None:
        return text
    try:
        instant = instant.astimezone(tz.UTC)
    except OverflowError:
        return text
    return f"{instant:%Y-%m-%dT%H:%M:%S}.{instant.microsecond // 1000:03d}Z"
