from enum import Enum
from typing import Any, Dict, TypedDict, Union


class ErrorType(Enum):
    """
    Enumeration for various error types used in the application.

    Attributes:
        HTTP_ERROR: Represents a non-success HTTP status from the calendar source.
        URL_ERROR: Represents an error related to malformed or unreachable URLs.
        FETCH_ERROR: Represents a network-level failure while fetching a calendar.
        INVALID_PAYLOAD: Represents a response body that is not a usable calendar.
        CALENDAR_FETCH_ERROR: Represents a fetch that failed with no cached fallback.
        PARSE_ERROR: Represents an error that occurs during ICS decoding.
        VALUE_ERROR: Represents an error caused by invalid values.
        UNKNOWN_ERROR: Represents an unknown or unspecified error.
    """

    HTTP_ERROR = "HTTP_ERROR"
    URL_ERROR = "URL_ERROR"
    FETCH_ERROR = "FETCH_ERROR"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    CALENDAR_FETCH_ERROR = "CALENDAR_FETCH_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    VALUE_ERROR = "VALUE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class AwsInfo(TypedDict):
    """
    A TypedDict representing invocation metadata of the hosting runtime.

    Attributes:
        aws_request_id (str): The unique identifier for the request.
        log_stream_name (str): The name of the log stream associated with the request.
    """

    aws_request_id: str
    log_stream_name: str


class SuccessResponseBase(TypedDict):
    """
    A base class for representing a successful response.

    Attributes:
        status (str): The status of the response, typically indicating success.
        data (Any): The data payload of the response.
        date (str): The absence date the response refers to.
    """

    status: str
    data: Any
    date: str


class ErrorResponseBase(TypedDict):
    """
    A TypedDict representing the structure of an error response.

    Attributes:
        status (str): The status of the response, typically indicating failure.
        error (Dict[str, str]): A dictionary containing error details,
        where the key is the error field
        and the value is the corresponding error message.
    """

    status: str
    error: Dict[str, str]


# Define the response types
SuccessResponse = Union[SuccessResponseBase, AwsInfo]
ErrorResponse = Union[ErrorResponseBase, AwsInfo]
ResponseBody = Union[SuccessResponse, ErrorResponse]


class ResponseType(TypedDict):
    """
    ResponseType is a TypedDict that defines the structure of a response object.

    Attributes:
        statusCode (int): The HTTP status code of the response.
        headers (Dict[str, str]): A dictionary containing the headers of the response.
        body (ResponseBody): The body of the response, represented by a ResponseBody object.
    """

    statusCode: int
    headers: Dict[str, str]
    body: ResponseBody
