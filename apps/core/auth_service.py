# apps/core/auth_service.py

"""
Authentication service - everything about credentials and bearer tokens

Views never touch password hashes or JWT payloads directly; they call
this service and receive either a token or an AuthContext.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple

import jwt
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import AuthError, ValidationError
from .models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """
    Identity of the caller, decoded from a verified token

    Passed explicitly into every service call that needs to know who acted.
    """

    user_id: int
    email: str

    # DRF's IsAuthenticated only looks at this flag
    is_authenticated = True

    def __str__(self):
        return self.email


class AuthenticationService:
    """
    Registration, login and token verification

    Tokens are HS256 JWTs with the payload {userId, email, iat, exp}.
    There is no refresh flow: once a token expires the user logs in again.
    """

    def register(self, email, password) -> str:
        """
        Creates a user and returns a fresh token

        Raises:
            ValidationError: missing/invalid fields or email already registered
        """
        email, password = self._validate_credentials(email, password)

        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError("Invalid email")

        if User.objects.email_taken(email):
            logger.info(f"⚠️ Registration refused, email already in use: {email}")
            raise ValidationError("User already exists")

        try:
            with transaction.atomic():
                user = User.objects.create_user(email=email, password=password)
        except IntegrityError:
            # Lost a race against a concurrent registration
            raise ValidationError("User already exists")

        logger.info(f"✅ User registered: {user.email}")
        return self.issue_token(user)

    def login(self, email, password) -> str:
        """
        Checks the credentials and returns a fresh token

        Raises:
            ValidationError: missing fields
            AuthError: unknown email or wrong password
        """
        email, password = self._validate_credentials(email, password)

        try:
            user = User.objects.get_by_email(email)
        except User.DoesNotExist:
            # Hash anyway so response time does not reveal unknown emails
            User().set_password(password)
            logger.warning(f"⚠️ Failed login attempt for: {email}")
            raise AuthError("Invalid credentials")

        if not user.is_active or not user.check_password(password):
            logger.warning(f"⚠️ Failed login attempt for: {email}")
            raise AuthError("Invalid credentials")

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        logger.info(f"🔑 User logged in: {user.email}")
        return self.issue_token(user)

    def issue_token(self, user: User) -> str:
        now = timezone.now()
        payload = {
            'userId': user.pk,
            'email': user.email,
            'iat': now,
            'exp': now + timedelta(seconds=settings.JWT_EXPIRATION),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    def verify(self, token: str) -> AuthContext:
        """
        Decodes a bearer token into an AuthContext

        Raises:
            AuthError: missing, malformed, badly signed or expired token
        """
        if not token:
            raise AuthError("No token provided")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=[settings.JWT_ALGORITHM],
                options={'require': ['exp']},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthError("Invalid token")

        user_id = payload.get('userId')
        email = payload.get('email')
        if user_id is None or not isinstance(email, str):
            raise AuthError("Invalid token")

        return AuthContext(user_id=user_id, email=email)

    # =================== PRIVATE ===================

    def _validate_credentials(self, email, password) -> Tuple[str, str]:
        if not isinstance(email, str) or not email.strip():
            raise ValidationError("Email is required")
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required")
        return email.strip(), password


# Global service instance
auth_service = AuthenticationService()
