import asyncio

import pytest

from absendo.fetcher.service import CalendarFetchGateway, FetchSettings

CALENDAR_URL = "https://calendar.example.org/student.ics"
SCHULNETZ_URL = "https://schulnetz.lu.ch/bbzw/cindex.php?longurl=Jh5vvNitgRj8xxga8Y78kJ7F"

SAMPLE_ICS = "\r\n".join(
    [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Schulnetz//Stundenplan//DE",
        "BEGIN:VEVENT",
        "UID:lesson-1@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "DTSTART:20240115T070000Z",
        "DTEND:20240115T074500Z",
        "SUMMARY:M-S-INF22a-MEI",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:lesson-2@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "DTSTART:20240115T074500Z",
        "DTEND:20240115T083000Z",
        "SUMMARY:M-S-INF22a-MEI",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:lesson-3@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "DTSTART:20240115T090000Z",
        "DTEND:20240115T094500Z",
        "SUMMARY:INF-S-INF22a-SCH",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:event-4@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "DTSTART:20240115T170000Z",
        "DTEND:20240115T180000Z",
        "SUMMARY:Elternabend - Herr Meier",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:lesson-5@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "DTSTART:20240116T070000Z",
        "DTEND:20240116T074500Z",
        "SUMMARY:D-S-INF22a-HUB",
        "END:VEVENT",
        "BEGIN:VTODO",
        "UID:todo-1@schulnetz.example",
        "DTSTAMP:20240101T000000Z",
        "SUMMARY:Hausaufgaben",
        "END:VTODO",
        "END:VCALENDAR",
        "",
    ]
)


class FakeClock:
    """Manually advanced clock for cache expiry."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockResponse:
    def __init__(self, session, text, status=200):
        self._session = session
        self._text = text
        self.status = status

    async def text(self):
        return self._text

    async def __aenter__(self):
        self._session.active += 1
        self._session.max_active = max(self._session.max_active, self._session.active)
        await asyncio.sleep(self._session.delay)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._session.active -= 1


class MockSession:
    """Stands in for aiohttp.ClientSession and records every request."""

    def __init__(self, text=SAMPLE_ICS, status=200, delay=0.0, error=None):
        self.text = text
        self.status = status
        self.delay = delay
        self.error = error
        self.calls = []
        self.active = 0
        self.max_active = 0
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return MockResponse(self, self.text, status=self.status)

    async def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return FetchSettings(
        cache_ttl_seconds=15 * 60,
        max_concurrent_fetches=3,
        request_timeout=5,
        gateway_url="https://proxy.example.org/proxy",
        gateway_host="schulnetz.lu.ch",
    )


@pytest.fixture
def mock_session():
    return MockSession()


@pytest.fixture
def gateway(settings, mock_session, clock):
    return CalendarFetchGateway(settings=settings, session=mock_session, clock=clock)
