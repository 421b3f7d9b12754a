"""
Custom exceptions and DRF exception handler for the Payment Collection API.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class CustomerNotFoundError(APIException):
    """Raised when a customer id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Customer not found'
    default_code = 'customer_not_found'


class AccountNotFoundError(APIException):
    """Raised when an account number does not resolve to a customer."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Account not found'
    default_code = 'account_not_found'


class PaymentValidationError(APIException):
    """Raised when a payment request is missing required input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Account number and payment amount are required'
    default_code = 'invalid_payment'


class StoreUnavailableError(APIException):
    """Raised when the underlying database cannot serve a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Data store unavailable. Please try again later.'
    default_code = 'store_unavailable'


class DataIngestionError(Exception):
    """Raised when data ingestion fails."""

    pass


@contextmanager
def store_unavailable_on_db_error(detail):
    """
    Translate database failures into StoreUnavailableError.

    The original DatabaseError is chained as ``__cause__``.
    """
    try:
        yield
    except DatabaseError as exc:
        logger.error("Store call failed: %s (%s)", detail, exc)
        raise StoreUnavailableError(detail=detail) from exc


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Handles all DRF exceptions and adds logging for server errors.
    """
    response = exception_handler(exc, context)

    if response is not None:
        if response.status_code >= 500:
            logger.error(
                "Server error in %s: %s",
                context.get('view', 'unknown'),
                exc,
                exc_info=exc.__cause__ or exc,
            )
        detail = response.data
        if isinstance(detail, dict) and set(detail) == {'detail'}:
            detail = detail['detail']

        error_data = {
            'error': True,
            'status_code': response.status_code,
            'detail': detail,
        }
        response.data = error_data
    else:
        # Unhandled exceptions: log and return 500
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            {
                'error': True,
                'status_code': 500,
                'detail': 'An unexpected error occurred. Please try again later.',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
