"""
Calendar retrieval.
"""

from .cache import CacheEntry, CalendarCache
from .ics import parse_ics
from .service import CalendarFetchGateway, FetchSettings
