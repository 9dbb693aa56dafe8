"""
Utility functions and shared resources.
"""

from .configs import MAX_LESSON_ROWS, base_configs, fetch_configs
from .errors import CalendarFetchError, InvalidPayloadError, TransportError, ValidationError
from .helpers import (
    generate_date_str,
    generate_response,
    parse_bool,
    parse_date_str,
    resolve_fetch_url,
    validate_params,
)
from .logger import logger
from .types import ErrorType
