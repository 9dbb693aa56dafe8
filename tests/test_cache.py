import pytest

from absendo.fetcher.cache import CalendarCache
from absendo.shared.schemas import RawCalendarDocument

from .conftest import CALENDAR_URL, FakeClock


@pytest.fixture
def cache(clock):
    return CalendarCache(ttl_seconds=60, clock=clock)


def test_miss(cache):
    assert cache.get(CALENDAR_URL) is None
    assert cache.get_entry(CALENDAR_URL) is None
    assert CALENDAR_URL not in cache


def test_fresh_entry_is_returned(cache, clock):
    document = RawCalendarDocument(source=CALENDAR_URL)
    entry = cache.set(CALENDAR_URL, document)

    clock.advance(59)

    assert cache.get(CALENDAR_URL) is document
    assert cache.is_fresh(entry)
    assert cache.age(entry) == 59


def test_expired_entry_is_kept_for_fallback(cache, clock):
    document = RawCalendarDocument(source=CALENDAR_URL)
    cache.set(CALENDAR_URL, document)

    clock.advance(60)

    assert cache.get(CALENDAR_URL) is None
    entry = cache.get_entry(CALENDAR_URL)
    assert entry is not None
    assert entry.document is document
    assert not cache.is_fresh(entry)


def test_set_replaces_entry(cache, clock):
    cache.set(CALENDAR_URL, RawCalendarDocument())
    clock.advance(120)
    newer = RawCalendarDocument(source="newer")

    cache.set(CALENDAR_URL, newer)

    assert cache.get(CALENDAR_URL) is newer
    assert len(cache) == 1


def test_delete_and_clear(cache):
    cache.set(CALENDAR_URL, RawCalendarDocument())
    cache.set("https://calendar.example.org/other.ics", RawCalendarDocument())

    assert cache.delete(CALENDAR_URL) is True
    assert cache.delete(CALENDAR_URL) is False
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_keys_are_prefixed():
    assert CalendarCache(ttl_seconds=1, clock=FakeClock())._get_cache_key("x") == "calendar:x"


def test_oldest_entries_are_evicted_beyond_max_entries(clock):
    cache = CalendarCache(ttl_seconds=60, max_entries=2, clock=clock)
    urls = [f"https://calendar.example.org/{i}.ics" for i in range(3)]

    for url in urls:
        cache.set(url, RawCalendarDocument(source=url))
        clock.advance(1)

    assert len(cache) == 2
    assert urls[0] not in cache
    assert urls[1] in cache and urls[2] in cache


def test_refreshed_entry_counts_as_newest(clock):
    cache = CalendarCache(ttl_seconds=60, max_entries=2, clock=clock)
    first, second, third = (f"https://calendar.example.org/{i}.ics" for i in range(3))

    cache.set(first, RawCalendarDocument())
    cache.set(second, RawCalendarDocument())
    cache.set(first, RawCalendarDocument())
    cache.set(third, RawCalendarDocument())

    assert first in cache
    assert second not in cache
    assert third in cache


def test_max_entries_must_be_positive():
    with pytest.raises(ValueError):
        CalendarCache(ttl_seconds=60, max_entries=0)
