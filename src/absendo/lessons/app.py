"""
Main application for the lesson extraction component.
"""

import asyncio
from typing import Any, Dict, Optional

from absendo.lessons.service import LessonService, build_lesson_rows, detect_class
from absendo.shared.utils.errors import CalendarFetchError, ValidationError
from absendo.shared.utils.helpers import generate_response, parse_date_str, validate_params
from absendo.shared.utils.logger import logger
from absendo.shared.utils.types import ErrorType


async def app(
    event: Dict[str, Any],
    context: Any = None,
    service: Optional[LessonService] = None,
) -> Dict[str, Any]:
    """
    Extract the lessons missed on an absence date from a student's calendar.

    Args:
        event: Invocation event; parameters are read from ``queryStringParameters``
            (``calendar_url``, optional ``date`` and ``full_names``)
        context: Invocation context object
        service: Lesson service to use. A fresh one is created and closed
            when omitted.

    Returns:
        Response object
    """
    aws_info = {}
    if context and hasattr(context, "aws_request_id"):
        aws_info = {
            "aws_request_id": context.aws_request_id,
            "log_stream_name": context.log_stream_name,
        }

    owns_service = service is None
    try:
        params = validate_params(event.get("queryStringParameters") or {})
        target_date = parse_date_str(params["date"])

        if owns_service:
            service = LessonService()

        events = await service.get_events(params["calendar_url"], target_date)
        rows = build_lesson_rows(events, use_full_names=params["full_names"])

        return generate_response(
            200,
            {
                "status": "success",
                "message": f"Found {len(rows)} lessons for {params['date']}",
                "date": params["date"],
                "klasse": detect_class(events),
                "data": [row.to_dict() for row in rows],
                **aws_info,
            },
        )

    except (ValidationError, CalendarFetchError) as e:
        logger.error(f"Lesson extraction error: {e.error_type.value} - {e.message}")
        return generate_response(
            e.status_code,
            {
                "status": "error",
                "error": {
                    "type": e.error_type,
                    "message": e.message,
                },
                **aws_info,
            },
        )
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        return generate_response(
            500,
            {
                "status": "error",
                "error": {
                    "type": ErrorType.UNKNOWN_ERROR,
                    "message": f"An unexpected error occurred: {e}",
                },
                **aws_info,
            },
        )
    finally:
        if owns_service and service:
            await service.close()


def lambda_handler(event, context):
    """
    Lambda handler function.

    Args:
        event: Lambda event object
        context: Lambda context object

    Returns:
        Response object
    """
    return asyncio.run(app(event, context))
