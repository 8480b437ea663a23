"""
API error types and the project-wide DRF exception handler.

Every error leaves the API as {"error": {"code": ..., "message": ...}}.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidRequest(APIException):
    """Request is well-formed but cannot be honoured (attempt limit, unmet quiz precondition)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'invalid_request'


def _first_code(codes):
    if isinstance(codes, str):
        return codes
    if isinstance(codes, dict) and codes:
        return _first_code(next(iter(codes.values())))
    if isinstance(codes, list) and codes:
        return _first_code(codes[0])
    return 'error'


def api_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(*exc.args)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(*exc.args)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
        return Response(
            {'error': {'code': 'internal_error', 'message': 'An unexpected error occurred'}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        body = {
            'code': 'validation_error',
            'message': 'Validation failed',
            'details': response.data,
        }
    elif isinstance(exc, APIException):
        body = {
            'code': _first_code(exc.get_codes()),
            'message': str(exc.detail),
        }
    else:
        body = {'code': 'error', 'message': str(response.data)}

    response.data = {'error': body}
    return response
