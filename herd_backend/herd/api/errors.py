# herd/api/errors.py

"""
Service error -> HTTP mapping for the herd API.

Body: {"detail": <message>, "code": <error code>[, "field": <input field>]}
"""

import logging

from rest_framework import status
from rest_framework.response import Response

from accounting.services.exceptions import (
    AccountingServiceError,
    CalculationError,
    LedgerStoreError,
)
from herd.services.exceptions import (
    CowNotFoundError,
    CowValidationError,
    DispositionConflictError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (CowValidationError, status.HTTP_400_BAD_REQUEST),
    (CowNotFoundError, status.HTTP_404_NOT_FOUND),
    (DispositionConflictError, status.HTTP_409_CONFLICT),
    (CalculationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (LedgerStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def error_response(*, code: str, message: str, http_status: int, field=None):
    """
    Canonical API error response.
    """
    body = {"detail": message, "code": code}
    if field:
        body["field"] = field
    return Response(body, status=http_status)


def service_error_response(exc: AccountingServiceError):
    http_status = status.HTTP_400_BAD_REQUEST
    for error_class, mapped in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            http_status = mapped
            break

    if http_status >= 500 or isinstance(exc, CalculationError):
        logger.error("Herd API request failed: %s (%s)", exc, exc.code)

    return error_response(
        code=exc.code,
        message=str(exc),
        http_status=http_status,
        field=getattr(exc, "field", None),
    )
