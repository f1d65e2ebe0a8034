"""Mapping from domain errors to HTTP responses.

Only the domain code and its user-safe message reach the client.
"""

from rest_framework import status
from rest_framework.response import Response

from enrollment.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WAIVER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOT_REGISTERED: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHILD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PAGINATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DOCUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WAIVER_NOT_APPLICABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_IS_DRAFT: status.HTTP_409_CONFLICT,
    ErrorCode.DEADLINE_PASSED: status.HTTP_409_CONFLICT,
    ErrorCode.AT_CAPACITY: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_SIGNED: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_NAME: status.HTTP_409_CONFLICT,
    ErrorCode.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.COLLABORATOR_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
    )
