from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.capacity.services import InvalidDateRange


def _message_from(detail) -> str:
    if isinstance(detail, dict):
        if "detail" in detail:
            return str(detail["detail"])
        return "Validation error"
    if isinstance(detail, list):
        return str(detail[0]) if detail else "Error"
    return str(detail)


def api_exception_handler(exc, context):
    """Wraps DRF error responses in the {"success": false, ...} envelope."""
    if isinstance(exc, InvalidDateRange):
        return Response(
            {"success": False, "message": str(exc), "errors": {"end_date": [str(exc)]}},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    response.data = {
        "success": False,
        "message": _message_from(response.data),
        "errors": response.data,
    }
    return response
