"""
Base exception for service-layer errors and the DRF exception handler.

Every app derives its domain exceptions from ``ServiceError`` so that
views can turn any of them into the same error body::

    {"error": "<message>", "code": "<stable code>", "retryable": false}

``retryable`` separates transient backend failures (database or storage
unavailable, rate limits, scan cooldown) from permanent business-rule
violations the client should not repeat.
"""
import logging

from django.db import OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all service errors."""

    code = 'service_error'
    status_code = status.HTTP_400_BAD_REQUEST
    retryable = False

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__ or self.code)


class StorageError(ServiceError):
    """Blob storage upload failed."""

    code = 'storage_error'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


def error_response(exc, status_code=None):
    """Build the error body for a ServiceError."""
    return Response(
        {
            'error': str(exc),
            'code': exc.code,
            'retryable': exc.retryable,
        },
        status=status_code or exc.status_code,
    )


def backend_exception_handler(exc, context):
    """
    DRF exception handler.

    Falls back to DRF's handler, then maps uncaught service errors and
    backend outages to the structured error body.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, ServiceError):
        return error_response(exc)

    if isinstance(exc, OperationalError):
        logger.error("Database unavailable: %s", exc)
        return Response(
            {
                'error': 'Backend temporarily unavailable. Please try again.',
                'code': 'backend_unavailable',
                'retryable': True,
            },
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return None
