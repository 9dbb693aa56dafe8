"""
Extraction of lessons from calendar entries.

Lesson titles in Schulnetz feeds are hyphen-separated: the subject code comes
first, the teacher code last, and class identifiers such as ``S-INF22a`` may
appear anywhere in between (or overlap the subject, see ``extract_classes``).
"""

import re
from datetime import date, datetime
from typing import List, Optional, Union

import pytz

from absendo.shared.schemas import CalendarEvent, CalendarEventEntry, RawCalendarDocument
from absendo.shared.utils.configs import base_configs
from absendo.shared.utils.logger import logger

# S-INF22a, W-KV23b, E-DET24c, R-MPA21a-LO
CLASS_PATTERN = re.compile(r"[SWER]-[A-Z]+\d{2}[a-zA-Z]+(?:-LO)?")

# de-CH short weekday names, Monday first
_WEEKDAY_ABBREVIATIONS = ("Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So.")
_WEEKDAY_NAMES = (
    "Montag",
    "Dienstag",
    "Mittwoch",
    "Donnerstag",
    "Freitag",
    "Samstag",
    "Sonntag",
)


def extract_classes(title: str) -> str:
    """
    Extract class identifiers from an event title.

    Args:
        title: Event summary, e.g. ``"M-S-INF22a-MEI"``

    Returns:
        All matches joined with commas, or an empty string
    """
    return ",".join(CLASS_PATTERN.findall(title))


def format_date(day: date) -> str:
    """
    Format a date the way the absence forms expect it, e.g. ``"Mo 15.01.2024"``.
    """
    weekday = _WEEKDAY_ABBREVIATIONS[day.weekday()].rstrip(".,")
    return f"{weekday} {day.day:02d}.{day.month:02d}.{day.year:04d}"


def get_weekday(day: date) -> str:
    """Get the full German weekday name of a date."""
    return _WEEKDAY_NAMES[day.weekday()]


def _as_local_date(
    value: Union[date, datetime], timezone: pytz.BaseTzInfo
) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(timezone).date()
    return value


def _parse_entry(entry: CalendarEventEntry, datum: str) -> Optional[CalendarEvent]:
    title = entry.summary or ""
    parts = title.split("-")
    if len(parts) < 2:
        return None

    fach = parts[0].strip()
    teacher = parts[-1].strip()

    # A space means the last segment is free text, not a teacher short code
    if " " in teacher:
        return None

    tokens = teacher.split()
    return CalendarEvent(
        datum=datum,
        fach=fach,
        lehrer=tokens[0] if tokens else "",
        klasse=extract_classes(title),
    )


def filter_events_by_date(
    document: RawCalendarDocument,
    target_date: Union[date, datetime],
    timezone: Optional[pytz.BaseTzInfo] = None,
) -> List[CalendarEvent]:
    """
    Extract the lessons that take place on a given day.

    Events are matched on the calendar day of their start in the local
    timezone; the time of day is ignored. Entries whose title cannot be split
    into subject and teacher are skipped.

    Args:
        document: Decoded calendar
        target_date: The absence date
        timezone: Timezone that decides which day an event falls on,
            defaults to the configured one

    Returns:
        Lessons in document order
    """
    timezone = timezone or base_configs["timezone"]
    target_day = _as_local_date(target_date, timezone)
    datum = format_date(target_day)

    lessons: List[CalendarEvent] = []
    for entry in document:
        if not isinstance(entry, CalendarEventEntry) or entry.start is None:
            continue
        if _as_local_date(entry.start, timezone) != target_day:
            continue

        lesson = _parse_entry(entry, datum)
        if lesson is None:
            logger.debug(f"Skipping calendar entry {entry.uid!r}: {entry.summary!r}")
            continue
        lessons.append(lesson)

    return lessons
