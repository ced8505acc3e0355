# apps/core/handlers.py

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from .exceptions import ConflictError, InternalError, NotFoundError

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Flatten DRF error details (str, list or dict) into one message"""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f"{field}: {message}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def exception_handler(exc, context):
    """
    Maps every exception reaching a view to {"error": message}

    Unknown exceptions are logged with traceback and become 500s instead
    of Django's HTML error page.
    """
    if isinstance(exc, Http404):
        exc = NotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, 'auth_header', None):
            headers['WWW-Authenticate'] = exc.auth_header

        body = {'error': _first_message(exc.detail)}
        if isinstance(exc, ConflictError):
            body['currentTask'] = exc.current_task

        if exc.status_code >= 500:
            logger.error(f"❌ {exc.__class__.__name__}: {body['error']}")

        set_rollback()
        return Response(body, status=exc.status_code, headers=headers)

    view = context.get('view')
    logger.exception(f"❌ Unexpected error in {view.__class__.__name__ if view else 'API'}: {exc}")
    set_rollback()
    return Response(
        {'error': InternalError.default_detail},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
