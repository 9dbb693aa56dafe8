"""
Schemas for the application.
"""

from .dto import (
    CalendarEntry,
    CalendarEvent,
    CalendarEventEntry,
    LessonRow,
    OtherEntry,
    ProcessedEvent,
    RawCalendarDocument,
)
