"""
Decoding of iCalendar payloads into RawCalendarDocument.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from icalendar import Calendar
from icalendar.error import BrokenCalendarProperty

from absendo.shared.schemas import CalendarEntry, CalendarEventEntry, OtherEntry, RawCalendarDocument
from absendo.shared.utils.errors import InvalidPayloadError
from absendo.shared.utils.logger import logger
from absendo.shared.utils.types import ErrorType

# Raised by icalendar for malformed property values
_PROPERTY_ERRORS = (BrokenCalendarProperty, ValueError, TypeError)


def _event_start(component, uid: str) -> Optional[Union[date, datetime]]:
    dtstart = component.get("DTSTART")
    if dtstart is None:
        return None
    try:
        return dtstart.dt
    except _PROPERTY_ERRORS as e:
        logger.debug(f"Ignoring unreadable DTSTART of {uid!r}: {e}")
        return None


def _to_entry(component, index: int) -> CalendarEntry:
    kind = component.name or "UNKNOWN"
    uid = str(component.get("UID", f"{kind.lower()}-{index}"))

    if kind != "VEVENT":
        return OtherEntry(uid=uid, kind=kind)

    return CalendarEventEntry(
        uid=uid,
        start=_event_start(component, uid),
        summary=str(component.get("SUMMARY", "")),
    )


def parse_ics(ics_data: str, source: str = "") -> RawCalendarDocument:
    """
    Parse ICS text into a RawCalendarDocument.

    Only the direct children of the VCALENDAR are turned into entries, so
    nested components such as VALARM never show up as entries of their own.
    A VEVENT whose start cannot be read is kept with ``start=None``; any
    other component that cannot be read is skipped.

    Args:
        ics_data: The iCalendar text
        source: The URL the text was fetched from, kept for logging

    Returns:
        RawCalendarDocument with entries in feed order

    Raises:
        InvalidPayloadError: If the text is not valid iCalendar
    """
    try:
        calendar = Calendar.from_ical(ics_data)
    except (KeyError, IndexError, *_PROPERTY_ERRORS) as e:
        raise InvalidPayloadError(
            message=f"Failed to parse calendar data: {e}",
            error_type=ErrorType.PARSE_ERROR,
            status_code=422,
        ) from e

    entries: List[CalendarEntry] = []
    for index, component in enumerate(calendar.subcomponents):
        try:
            entries.append(_to_entry(component, index))
        except _PROPERTY_ERRORS as e:
            logger.debug(f"Skipping unreadable {component.name} component #{index}: {e}")

    document = RawCalendarDocument(entries=tuple(entries), source=source)

    logger.debug(f"Calendar data parsed successfully: {len(document)} entries")
    if not document.events:
        logger.warning(f"No events found in calendar data from {source or 'payload'}")

    return document
