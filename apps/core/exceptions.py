# apps/core/exceptions.py

"""
Error taxonomy of the task board API

Every failure raised by a service is one of these classes. They become
HTTP responses in apps.core.handlers, always shaped as {"error": message}.

Only rest_framework.exceptions is imported here: the authentication
class depends on this module and is itself loaded by rest_framework.views.
"""

from rest_framework import exceptions, status


class ValidationError(exceptions.APIException):
    """Malformed, missing or out-of-enum input"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'invalid'


class AuthError(exceptions.AuthenticationFailed):
    """
    Bad credentials or bad/expired bearer token

    DRF attaches the view's WWW-Authenticate challenge to it.
    """

    default_detail = 'Invalid credentials'


class NotFoundError(exceptions.APIException):
    """Missing task or user"""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class ConflictError(exceptions.APIException):
    """
    Stale write detected by the optimistic concurrency check

    Carries the stored task so the client can reconcile.
    """

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict detected'
    default_code = 'conflict'

    def __init__(self, current_task, detail=None):
        super().__init__(detail)
        self.current_task = current_task


class InternalError(exceptions.APIException):
    """Store unavailable or any unexpected failure"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'error'
