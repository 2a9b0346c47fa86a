"""
DRF ``EXCEPTION_HANDLER``: every failure leaves the API as

    {"title", "timestamp", "status", "exception", "details"}
"""

import logging
from http import HTTPStatus

from django.db import IntegrityError
from django.http import JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from .exceptions import BusinessException

logger = logging.getLogger(__name__)


def _class_path(exc):
    cls = type(exc)
    return f"{cls.__module__}.{cls.__qualname__}"


def _title(status_code):
    return f"{HTTPStatus(status_code).phrase}! Consult the documentation"


def error_body(exc, status_code, details):
    return {
        "title": _title(status_code),
        "timestamp": timezone.now().isoformat(),
        "status": status_code,
        "exception": _class_path(exc),
        "details": details,
    }


def _first_messages(detail, prefix=''):
    """Flatten DRF error detail into ``{field: first message}``."""
    if isinstance(detail, dict):
        flat = {}
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            flat.update(_first_messages(value, name))
        return flat
    if isinstance(detail, list):
        if not detail:
            return {}
        return _first_messages(detail[0], prefix)
    return {prefix or 'non_field_errors': str(detail)}


def exception_handler(exc, context):
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        details = _first_messages(exc.detail) or {'non_field_errors': 'Invalid input'}
    elif isinstance(exc, BusinessException):
        status_code = status.HTTP_400_BAD_REQUEST
        details = {str(exc.kind): exc.message}
    elif isinstance(exc, IntegrityError):
        status_code = status.HTTP_409_CONFLICT
        details = {'cause': str(exc)}
    else:
        # APIException, Http404, PermissionDenied; DRF keeps the extra headers
        response = drf_exception_handler(exc, context)
        if response is None:
            return None
        response.data = error_body(exc, response.status_code, _first_messages(response.data))
        return response

    logger.warning("%s -> %d: %s", _class_path(exc), status_code, details)
    set_rollback()
    return Response(error_body(exc, status_code, details), status=status_code)


def page_not_found(request, exception):
    """``handler404``: unmatched routes never reach a DRF view."""
    return JsonResponse(
        error_body(exception, status.HTTP_404_NOT_FOUND, {'path': request.path}),
        status=status.HTTP_404_NOT_FOUND,
    )
