"""
exceptions.py

Error kinds raised by the seating engine and the DRF handler that renders them.
"""

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler


class SeatingError(APIException):
    """Base for every failure the engine reports back to its caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "invalid_request"

    def __init__(self, message=None):
        super().__init__(detail=message)
        self.message = str(self.detail)

    def __str__(self):
        return self.message


class InvalidRequest(SeatingError):
    """Malformed or semantically illegal input; the client can fix it."""


class NotFound(SeatingError):
    """A referenced table or reservation does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


def seating_exception_handler(exc, context):
    """
    Render ``SeatingError`` as ``{"error": message}`` with its status code.
    Everything else falls through to DRF's default handler.
    """
    if isinstance(exc, SeatingError):
        return Response({"error": exc.message}, status=exc.status_code)
    return exception_handler(exc, context)
