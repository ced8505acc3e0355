# tests/conftest.py

import pytest
from rest_framework.test import APIClient

from apps.board.services import TaskService
from apps.core.auth_service import AuthContext, auth_service
from apps.core.models import User

from .fakes import FakeBroadcaster


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def user(db):
    return User.objects.create_user(email='a@x.com', password='pw1')


@pytest.fixture()
def other_user(db):
    return User.objects.create_user(email='b@x.com', password='pw2')


@pytest.fixture()
def actor(user):
    return AuthContext(user_id=user.pk, email=user.email)


@pytest.fixture()
def token(user):
    return auth_service.issue_token(user)


@pytest.fixture()
def auth_client(api_client, token):
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return api_client


@pytest.fixture()
def broadcaster():
    return FakeBroadcaster()


@pytest.fixture()
def service(broadcaster):
    return TaskService(broadcaster=broadcaster)
