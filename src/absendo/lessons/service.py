"""
Lesson service: turns a calendar into the lesson rows of an absence form.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from absendo.fetcher.service import CalendarFetchGateway
from absendo.lessons.aggregator import remove_duplicates_with_count
from absendo.lessons.data_mapping import get_subject_name, get_teacher_name
from absendo.lessons.parser import filter_events_by_date
from absendo.shared.schemas import LessonRow, ProcessedEvent, RawCalendarDocument
from absendo.shared.utils.configs import MAX_LESSON_ROWS
from absendo.shared.utils.logger import logger


def process_events(
    document: RawCalendarDocument, target_date: Union[date, datetime]
) -> List[ProcessedEvent]:
    """
    Extract the unique lessons of a day with their period counts.

    Args:
        document: Decoded calendar
        target_date: The absence date

    Returns:
        ProcessedEvent list in first-seen order
    """
    return remove_duplicates_with_count(filter_events_by_date(document, target_date))


def build_lesson_rows(
    events: Iterable[ProcessedEvent],
    use_full_names: bool = False,
    max_rows: int = MAX_LESSON_ROWS,
) -> List[LessonRow]:
    """
    Map processed lessons to absence form rows.

    Args:
        events: Processed lessons
        use_full_names: Write display names instead of short codes
        max_rows: Number of lesson rows the form offers; extra lessons are dropped

    Returns:
        At most ``max_rows`` LessonRow objects
    """
    rows: List[LessonRow] = []
    for event in events:
        if len(rows) >= max_rows:
            logger.warning(f"More lessons than form rows, dropping lessons after row {max_rows}")
            break
        rows.append(
            LessonRow(
                anzahl_lektionen=str(event.count),
                wochentag_und_datum=event.datum,
                fach=get_subject_name(event.fach) if use_full_names else event.fach,
                lehrperson=get_teacher_name(event.lehrer) if use_full_names else event.lehrer,
            )
        )
    return rows


def detect_class(events: Iterable[ProcessedEvent]) -> str:
    """Get the first class identifier found among the lessons, for the form's class field."""
    for event in events:
        if event.klasse:
            return event.klasse
    return ""


class LessonService:
    """
    Fetches a student's calendar and prepares the lessons missed on a day.
    """

    def __init__(self, gateway: Optional[CalendarFetchGateway] = None):
        self.gateway = gateway or CalendarFetchGateway()

    async def get_events(
        self, calendar_url: str, target_date: Union[date, datetime]
    ) -> List[ProcessedEvent]:
        """
        Fetch the calendar and extract the unique lessons of the absence date.

        Raises:
            CalendarFetchError: If the calendar is unavailable and not cached
        """
        document = await self.gateway.fetch_calendar_data(calendar_url)
        events = process_events(document, target_date)
        logger.info(f"Processed {len(events)} unique lessons for {target_date}")
        return events

    async def get_lessons(
        self,
        calendar_url: str,
        target_date: Union[date, datetime],
        use_full_names: bool = False,
    ) -> List[LessonRow]:
        """
        Fetch the calendar and build the form rows for the absence date.

        Args:
            calendar_url: The student's calendar URL
            target_date: The absence date
            use_full_names: Write display names instead of short codes

        Returns:
            LessonRow list, at most one form's worth
        """
        events = await self.get_events(calendar_url, target_date)
        return build_lesson_rows(events, use_full_names=use_full_names)

    async def close(self):
        await self.gateway.close()
