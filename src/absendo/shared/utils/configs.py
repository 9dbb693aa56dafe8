"""
Configuration settings for the application.
"""

import os
from typing import Dict, Tuple, TypedDict

import pytz
from dotenv import load_dotenv

load_dotenv()  # Load variables from .env


class BaseConfig(TypedDict):
    """Type definition for base configuration values.

    Attributes:
        timezone: pytz timezone object used to decide which day an event falls on
        date_format: Format string for date parsing/formatting of request params
        default_headers: Default HTTP headers for calendar requests
    """

    timezone: pytz.BaseTzInfo
    date_format: str
    default_headers: Dict[str, str]


class FetchConfig(TypedDict):
    """Type definition for calendar fetch settings.

    Attributes:
        gateway_url: Proxy endpoint that matching calendar URLs are rewritten through
        gateway_host: Hostname substring that triggers the gateway rewrite
        cache_ttl_seconds: How long a fetched calendar is served without refetching
        cache_max_entries: Number of calendars kept before the oldest is evicted
        max_concurrent_fetches: Width of the outbound request gate
        request_timeout: Total timeout per request, in seconds
        min_payload_length: Bodies shorter than this are rejected
        error_markers: Substrings that mark a body as an error page
    """

    gateway_url: str
    gateway_host: str
    cache_ttl_seconds: int
    cache_max_entries: int
    max_concurrent_fetches: int
    request_timeout: int
    min_payload_length: int
    error_markers: Tuple[str, ...]


base_configs: BaseConfig = {
    "timezone": pytz.timezone(os.getenv("APP_TIMEZONE", "Europe/Zurich")),
    "date_format": "%Y-%m-%d",
    "default_headers": {
        "User-Agent": os.getenv(
            "USER_AGENT",
            "Mozilla/5.0 (compatible; Absendo/1.0; +https://absendo.app)",
        ),
        "Accept": "text/calendar, text/plain, */*",
    },
}

fetch_configs: FetchConfig = {
    "gateway_url": os.getenv("CALENDAR_GATEWAY_URL", "https://api.absendo.app/proxy"),
    "gateway_host": os.getenv("CALENDAR_GATEWAY_HOST", "schulnetz.lu.ch"),
    "cache_ttl_seconds": int(os.getenv("CALENDAR_CACHE_TTL_SECONDS", 15 * 60)),
    "cache_max_entries": int(os.getenv("CALENDAR_CACHE_MAX_ENTRIES", 256)),
    "max_concurrent_fetches": int(os.getenv("CALENDAR_MAX_CONCURRENT_FETCHES", 5)),
    "request_timeout": int(os.getenv("CALENDAR_FETCH_TIMEOUT", 30)),
    "min_payload_length": int(os.getenv("CALENDAR_MIN_PAYLOAD_LENGTH", 50)),
    "error_markers": ("UID NOT FOUND", "ERROR"),
}

# Number of lesson rows available on the absence forms
MAX_LESSON_ROWS = 7
