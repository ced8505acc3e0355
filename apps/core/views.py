# apps/core/views.py

import logging

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .auth_service import auth_service
from .authentication import BearerTokenAuthentication
from .exceptions import ValidationError
from .models import User

logger = logging.getLogger(__name__)


def json_object(request):
    """
    The parsed request body, which must be a JSON object

    JSONParser also accepts arrays, strings and null; those are 400s here.
    """
    data = request.data
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


class PublicAPIView(APIView):
    """Base for the routes exempt from bearer-token authentication"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get_authenticate_header(self, request):
        # Failed logins answer 401 with the Bearer challenge, never 403
        return BearerTokenAuthentication.keyword


class RegisterView(PublicAPIView):
    """
    POST /api/auth/register {email, password} -> 201 {token}
    """

    def post(self, request):
        data = json_object(request)
        token = auth_service.register(data.get('email'), data.get('password'))
        return Response({'token': token}, status=status.HTTP_201_CREATED)


class LoginView(PublicAPIView):
    """
    POST /api/auth/login {email, password} -> 200 {token}
    """

    def post(self, request):
        data = json_object(request)
        token = auth_service.login(data.get('email'), data.get('password'))
        return Response({'token': token})


class HealthCheckView(PublicAPIView):
    """
    Health check for monitoring

    Touches the database and the cache so a broken store shows up here.
    """

    def get(self, request):
        try:
            User.objects.exists()

            cache.set('health_check', 'ok', 60)
            cache.get('health_check')

        except Exception as e:
            logger.error(f"❌ Health check failed: {e}")
            return Response(
                {
                    'status': 'unhealthy',
                    'error': str(e),
                    'timestamp': timezone.now().isoformat(),
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({'status': 'OK'})
