# apps/core/authentication.py

from rest_framework.authentication import BaseAuthentication, get_authorization_header

from .auth_service import auth_service
from .exceptions import AuthError


class BearerTokenAuthentication(BaseAuthentication):
    """
    DRF authentication class for `Authorization: Bearer <token>`

    On success request.user is the AuthContext decoded from the token.
    A missing header leaves the request anonymous so IsAuthenticated
    answers 401; a present but bad header fails straight away.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        header = get_authorization_header(request).split()

        if not header:
            return None

        if header[0].lower() != self.keyword.lower().encode():
            raise AuthError("Invalid authorization header")

        if len(header) != 2:
            raise AuthError("Invalid authorization header")

        try:
            token = header[1].decode()
        except UnicodeError:
            raise AuthError("Invalid token")

        return auth_service.verify(token), token

    def authenticate_header(self, request):
        return self.keyword
