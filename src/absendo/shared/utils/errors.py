"""
Error handling for the application.
"""

from absendo.shared.utils.types import ErrorType


class TransportError(Exception):
    """Custom exception for network or HTTP failures while fetching a calendar.

    Common status codes:
    - 503: Service Unavailable (default) - Calendar host unreachable or timed out
    - 404: Not Found - Calendar URL doesn't exist
    - 403: Forbidden - Access denied
    - 429: Too Many Requests - Rate limiting
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.FETCH_ERROR,
        status_code: int = 503,
    ):
        """
        Initialize a TransportError.

        Args:
            message (str): A human-readable error message.
            error_type (ErrorType): The category of the error (default: FETCH_ERROR).
            status_code (int): HTTP-style status code associated with the error (default: 503).
        """
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        super().__init__(self.message)


class InvalidPayloadError(Exception):
    """Custom exception for response bodies that are not a usable calendar.

    Raised when the body is implausibly short, carries a known error marker,
    or cannot be decoded as iCalendar.
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INVALID_PAYLOAD,
        status_code: int = 422,
    ):
        """
        Initialize an InvalidPayloadError.

        Args:
            message (str): A human-readable error message.
            error_type (ErrorType): The category of the error (default: INVALID_PAYLOAD).
            status_code (int): HTTP-style status code associated with the error (default: 422).
        """
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        super().__init__(self.message)


class CalendarFetchError(Exception):
    """Custom exception surfaced when a calendar cannot be retrieved and no
    cached copy exists. The underlying TransportError or InvalidPayloadError
    is chained as ``__cause__``.

    Common status codes:
    - 502: Bad Gateway (default) - Calendar source failed
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.CALENDAR_FETCH_ERROR,
        status_code: int = 502,
    ):
        """
        Initialize a CalendarFetchError.

        Args:
            message (str): A human-readable error message.
            error_type (ErrorType): The category of the error (default: CALENDAR_FETCH_ERROR).
            status_code (int): HTTP-style status code associated with the error (default: 502).
        """
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(Exception):
    """Custom exception for invalid request parameters.

    Common status codes:
    - 400: Bad Request (default)
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.VALUE_ERROR,
        status_code: int = 400,
    ):
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        super().__init__(self.message)
