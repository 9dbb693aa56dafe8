"""
Utility functions for the application.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlparse

from absendo.shared.utils.configs import base_configs, fetch_configs
from absendo.shared.utils.errors import ValidationError
from absendo.shared.utils.logger import logger
from absendo.shared.utils.types import ErrorType, ResponseBody, ResponseType

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def resolve_fetch_url(
    calendar_url: str,
    gateway_url: Optional[str] = None,
    gateway_host: Optional[str] = None,
) -> str:
    """
    Rewrite a calendar URL through the gateway when it points at a host that
    has to be proxied.

    Args:
        calendar_url: The calendar URL supplied by the user
        gateway_url: Proxy endpoint, defaults to the configured one. An empty
            string disables the rewrite.
        gateway_host: Hostname substring that triggers the rewrite

    Returns:
        The URL the request should actually be sent to

    Examples:
        # resolve_fetch_url("https://schulnetz.lu.ch/bbzw/cindex.php?longurl=abc")
        #   -> "https://api.absendo.app/proxy?url=https%3A%2F%2Fschulnetz.lu.ch%2F..."
        # resolve_fetch_url("https://example.org/cal.ics")
        #   -> "https://example.org/cal.ics"
    """
    gateway_url = fetch_configs["gateway_url"] if gateway_url is None else gateway_url
    gateway_host = fetch_configs["gateway_host"] if gateway_host is None else gateway_host

    if gateway_url and gateway_host and gateway_host in calendar_url:
        return f"{gateway_url}?{urlencode({'url': calendar_url})}"
    return calendar_url


def generate_response(status_code: int, body: ResponseBody) -> ResponseType:
    """
    Generate a standardized API response.

    Args:
        status_code: HTTP status code for the response
        body: Response body content

    Returns:
        Formatted response object
    """
    if isinstance(body.get("error", {}).get("type", None), ErrorType):
        body["error"]["type"] = body["error"]["type"].value

    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
        },
        "body": body,
    }


def generate_date_str() -> str:
    """
    Generate today's date string in the configured timezone and format.

    Returns:
        Date string in the configured format
    """
    date_param = datetime.now(base_configs["timezone"]).date()
    return date_param.strftime(base_configs["date_format"])


def parse_date_str(date_str: str) -> date:
    """
    Parse a request date string.

    Raises:
        ValidationError: If the string does not match the configured format
    """
    try:
        return datetime.strptime(date_str, base_configs["date_format"]).date()
    except ValueError as e:
        raise ValidationError(
            message=f"Invalid date format: {e}",
            error_type=ErrorType.VALUE_ERROR,
            status_code=400,
        )


def parse_bool(value: Any, key: str) -> bool:
    """Parse a boolean query parameter."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValidationError(
        message=f'Parameter {key} must be either "true" or "false". Received "{value}"',
        error_type=ErrorType.VALUE_ERROR,
        status_code=400,
    )


def validate_params(query_string_params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Validate query string parameters.

    Args:
        query_string_params: Query string parameters to validate

    Returns:
        Validated parameters with defaults applied where needed:
        ``calendar_url`` (str), ``date`` (str) and ``full_names`` (bool)
    """
    query_string_params = query_string_params or {}

    calendar_url = (query_string_params.get("calendar_url") or "").strip()
    if not calendar_url:
        raise ValidationError(
            message="Calendar URL is required",
            error_type=ErrorType.URL_ERROR,
            status_code=400,
        )
    parsed = urlparse(calendar_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            message=f"Invalid calendar URL: {calendar_url}",
            error_type=ErrorType.URL_ERROR,
            status_code=400,
        )

    date_param = query_string_params.get("date")
    if date_param:
        parse_date_str(date_param)
    else:
        date_param = generate_date_str()
        logger.info(f"No date provided, using today's date: {date_param}")

    full_names = parse_bool(query_string_params.get("full_names", False), "full_names")

    return {
        **query_string_params,
        "calendar_url": calendar_url,
        "date": date_param,
        "full_names": full_names,
    }
