"""
Fetch service for retrieving calendar feeds.

Wraps outbound calendar requests with a TTL cache, per-URL deduplication of
in-flight requests and a global concurrency gate.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import aiohttp

from absendo.fetcher.cache import CalendarCache
from absendo.fetcher.ics import parse_ics
from absendo.shared.schemas import RawCalendarDocument
from absendo.shared.utils.configs import base_configs, fetch_configs
from absendo.shared.utils.errors import CalendarFetchError, InvalidPayloadError, TransportError
from absendo.shared.utils.helpers import resolve_fetch_url
from absendo.shared.utils.logger import logger
from absendo.shared.utils.types import ErrorType


def _mark_retrieved(task: asyncio.Task) -> None:
    """Mark a failed fetch as retrieved, also when every caller has cancelled."""
    if not task.cancelled():
        task.exception()


@dataclass(frozen=True)
class FetchSettings:
    """
    Settings injected into a CalendarFetchGateway.

    Attributes:
        cache_ttl_seconds: Freshness window of cached calendars
        cache_max_entries: Number of calendars kept before the oldest is evicted
        max_concurrent_fetches: Maximum simultaneous outbound requests
        request_timeout: Total timeout per request, in seconds
        min_payload_length: Shorter bodies are rejected as invalid
        error_markers: Substrings that mark a body as an error page
        gateway_url: Proxy endpoint, empty to disable the rewrite
        gateway_host: Hostname substring that triggers the rewrite
        headers: Headers sent with every request
    """

    cache_ttl_seconds: float = 15 * 60
    cache_max_entries: int = 256
    max_concurrent_fetches: int = 5
    request_timeout: float = 30
    min_payload_length: int = 50
    error_markers: Tuple[str, ...] = ("UID NOT FOUND", "ERROR")
    gateway_url: str = ""
    gateway_host: str = "schulnetz.lu.ch"
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_configs(cls) -> "FetchSettings":
        """Build settings from the environment-derived configuration."""
        return cls(
            cache_ttl_seconds=fetch_configs["cache_ttl_seconds"],
            cache_max_entries=fetch_configs["cache_max_entries"],
            max_concurrent_fetches=fetch_configs["max_concurrent_fetches"],
            request_timeout=fetch_configs["request_timeout"],
            min_payload_length=fetch_configs["min_payload_length"],
            error_markers=fetch_configs["error_markers"],
            gateway_url=fetch_configs["gateway_url"],
            gateway_host=fetch_configs["gateway_host"],
            headers=dict(base_configs["default_headers"]),
        )


class CalendarFetchGateway:
    """
    Retrieves calendar documents for source URLs.

    Guarantees that at most one request per source URL is outstanding at any
    time and that no more than ``max_concurrent_fetches`` requests are
    outstanding across all sources. Waiters for the gate are admitted in
    arrival order.
    """

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the gateway.

        Args:
            settings: Fetch settings, defaults to the configured ones
            session: HTTP session to use. When omitted one is created lazily
                and closed by :meth:`close`.
            clock: Monotonic clock used for cache expiry
        """
        self.settings = settings or FetchSettings.from_configs()
        if self.settings.max_concurrent_fetches < 1:
            raise ValueError("max_concurrent_fetches must be at least 1")

        self.session = session
        self._owns_session = session is None
        self.cache = CalendarCache(
            ttl_seconds=self.settings.cache_ttl_seconds,
            max_entries=self.settings.cache_max_entries,
            clock=clock,
        )
        self._in_flight: Dict[str, asyncio.Task] = {}
        self._gate = asyncio.Semaphore(self.settings.max_concurrent_fetches)

    async def fetch_calendar_data(self, source_id: str) -> RawCalendarDocument:
        """
        Fetch and parse the calendar behind a source URL.

        Args:
            source_id: Direct URL to an ICS feed or a Schulnetz calendar URL

        Returns:
            The decoded calendar, possibly from cache

        Raises:
            CalendarFetchError: If the calendar could not be retrieved and no
                cached copy exists
        """
        cached = self.cache.get(source_id)
        if cached is not None:
            return cached

        task = self._in_flight.get(source_id)
        if task is None:
            task = asyncio.create_task(self._fetch_and_store(source_id))
            task.add_done_callback(_mark_retrieved)
            self._in_flight[source_id] = task
        else:
            logger.info(f"Joining in-flight request for {source_id}")

        # A cancelled caller must not cancel the request other callers share
        return await asyncio.shield(task)

    async def _fetch_and_store(self, source_id: str) -> RawCalendarDocument:
        try:
            try:
                document = await self._retrieve(source_id)
            except (TransportError, InvalidPayloadError) as e:
                stale = self.cache.get_entry(source_id)
                if stale is not None:
                    logger.warning(
                        f"Fetching {source_id} failed ({e.message}), serving cached copy "
                        f"from {self.cache.age(stale):.0f}s ago"
                    )
                    return stale.document

                logger.error(f"Error fetching calendar data from {source_id}: {e.message}")
                raise CalendarFetchError(
                    message=f"Failed to fetch calendar data: {e.message}",
                    error_type=ErrorType.CALENDAR_FETCH_ERROR,
                    status_code=502,
                ) from e

            self.cache.set(source_id, document)
            return document
        finally:
            self._in_flight.pop(source_id, None)

    async def _retrieve(self, source_id: str) -> RawCalendarDocument:
        url = resolve_fetch_url(
            source_id,
            gateway_url=self.settings.gateway_url,
            gateway_host=self.settings.gateway_host,
        )
        if url != source_id:
            logger.info(f"Routing calendar request through gateway: {url}")

        async with self._gate:
            ics_data = await self.fetch_ics(url)

        self.validate_payload(ics_data)
        return parse_ics(ics_data, source=source_id)

    async def fetch_ics(self, url: str) -> str:
        """
        Fetch ICS content from a URL.

        Args:
            url: URL to fetch

        Returns:
            Response body as a string

        Raises:
            TransportError: On network failures, timeouts and non-2xx statuses
        """
        if not self.session:
            self.session = aiohttp.ClientSession()

        logger.debug(f"Fetching calendar data from {url}")
        try:
            async with self.session.get(
                url,
                headers=self.settings.headers,
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    raise TransportError(
                        message=f"Failed to fetch calendar: HTTP {response.status}",
                        error_type=ErrorType.HTTP_ERROR,
                        status_code=response.status,
                    )
                return await response.text()
        except TransportError:
            raise
        except asyncio.TimeoutError:
            raise TransportError(
                message=f"Timed out after {self.settings.request_timeout}s",
                error_type=ErrorType.FETCH_ERROR,
                status_code=504,
            )
        except aiohttp.ClientError as e:
            raise TransportError(
                message=f"Failed to fetch calendar: {e}",
                error_type=ErrorType.FETCH_ERROR,
                status_code=503,
            )
        except UnicodeDecodeError as e:
            raise InvalidPayloadError(
                message=f"Calendar response is not valid text: {e}",
            )

    def validate_payload(self, ics_data: str) -> None:
        """
        Reject bodies that are too short or carry an error marker.

        Raises:
            InvalidPayloadError: If the body is not a usable calendar
        """
        if len(ics_data) < self.settings.min_payload_length or any(
            marker in ics_data for marker in self.settings.error_markers
        ):
            logger.warning(f"Received invalid ICS data: {ics_data[:200]!r}")
            raise InvalidPayloadError(
                message=(
                    "Invalid calendar data received. "
                    "The calendar URL may be expired or incorrect."
                ),
            )

    def invalidate(self, source_id: str) -> bool:
        """Drop the cached calendar for a source URL."""
        return self.cache.delete(source_id)

    async def close(self):
        """Clean up resources."""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "CalendarFetchGateway":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
