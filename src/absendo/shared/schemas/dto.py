"""
Data Transfer Objects (DTOs) for the application.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class CalendarEventEntry:
    """
    A VEVENT component of a calendar feed.

    Attributes:
        uid (str): The UID of the component, or a positional fallback.
        start (date | datetime | None): DTSTART. A plain date for all-day
            events, a datetime otherwise, None when the component has none.
        summary (str): The SUMMARY text. Lesson titles look like
            ``"M-S-INF22a-MEI"``.
    """

    uid: str
    start: Optional[Union[date, datetime]]
    summary: str = ""


@dataclass(frozen=True)
class OtherEntry:
    """
    Any non-VEVENT component (VTIMEZONE, VTODO, ...). Kept so the document
    reflects the feed, never matched by date filtering.
    """

    uid: str
    kind: str


CalendarEntry = Union[CalendarEventEntry, OtherEntry]


@dataclass(frozen=True)
class RawCalendarDocument:
    """
    Decoded calendar feed: an immutable, ordered collection of entries.

    Attributes:
        entries (Tuple[CalendarEntry, ...]): Components in feed order.
        source (str): The URL the document was fetched from, if any.
    """

    entries: Tuple[CalendarEntry, ...] = field(default_factory=tuple)
    source: str = ""

    def __iter__(self) -> Iterator[CalendarEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def events(self) -> Tuple[CalendarEventEntry, ...]:
        return tuple(e for e in self.entries if isinstance(e, CalendarEventEntry))


@dataclass(frozen=True)
class CalendarEvent:
    """
    One lesson extracted from a calendar entry.

    Attributes:
        datum (str): Absence date label, e.g. ``"Mo 15.01.2024"``.
        fach (str): Subject short code.
        lehrer (str): Teacher short code. Never contains whitespace.
        klasse (str): Comma-joined class identifiers, or an empty string.
    """

    datum: str
    fach: str
    lehrer: str
    klasse: str = ""

    @property
    def key(self) -> Tuple[str, str, str]:
        """Grouping key used for deduplication; the date label is not part of it."""
        return (self.fach, self.lehrer, self.klasse)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProcessedEvent(CalendarEvent):
    """
    A unique lesson with the number of periods it occupied on the absence date.

    Attributes:
        count (int): Number of calendar entries collapsed into this lesson, >= 1.
    """

    count: int = 1

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")


@dataclass(frozen=True)
class LessonRow:
    """
    One lesson row of an absence form. All values are strings because they
    are written straight into PDF text fields.

    Attributes:
        anzahl_lektionen (str): Number of periods missed.
        wochentag_und_datum (str): Weekday and date label.
        fach (str): Subject code or display name.
        lehrperson (str): Teacher code or display name.
    """

    anzahl_lektionen: str
    wochentag_und_datum: str
    fach: str
    lehrperson: str

    def to_dict(self) -> dict:
        return asdict(self)
