# tests/test_auth.py

import jwt
import pytest
from django.conf import settings
from django.test import override_settings

from apps.core.auth_service import AuthContext, auth_service
from apps.core.exceptions import AuthError, ValidationError
from apps.core.hashers import TaskboardBCryptPasswordHasher
from apps.core.models import User

pytestmark = pytest.mark.django_db


def test_register_stores_hash_and_returns_token():
    token = auth_service.register('new@x.com', 'secret')

    user = User.objects.get(email='new@x.com')
    assert user.password != 'secret'
    assert user.check_password('secret')

    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=['HS256'])
    assert payload['userId'] == user.pk
    assert payload['email'] == 'new@x.com'
    assert payload['exp'] - payload['iat'] == settings.JWT_EXPIRATION


def test_register_duplicate_email_is_refused(user):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register('a@x.com', 'whatever')

    assert str(excinfo.value.detail) == 'User already exists'
    assert User.objects.filter(email='a@x.com').count() == 1


@pytest.mark.parametrize('email, password', [
    (None, 'pw'),
    ('', 'pw'),
    ('a@x.com', None),
    ('a@x.com', ''),
    (42, 'pw'),
])
def test_register_requires_email_and_password(email, password):
    with pytest.raises(ValidationError):
        auth_service.register(email, password)


def test_register_rejects_malformed_email():
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register('not-an-email', 'pw')

    assert str(excinfo.value.detail) == 'Invalid email'


def test_login_returns_token_for_valid_credentials(user):
    token = auth_service.login('a@x.com', 'pw1')

    context = auth_service.verify(token)
    assert context == AuthContext(user_id=user.pk, email='a@x.com')

    user.refresh_from_db()
    assert user.last_login is not None


def test_login_wrong_password(user):
    with pytest.raises(AuthError):
        auth_service.login('a@x.com', 'wrong')


def test_login_unknown_email():
    with pytest.raises(AuthError):
        auth_service.login('ghost@x.com', 'pw1')


def test_verify_rejects_expired_token(user):
    with override_settings(JWT_EXPIRATION=-10):
        token = auth_service.issue_token(user)

    with pytest.raises(AuthError) as excinfo:
        auth_service.verify(token)
    assert str(excinfo.value.detail) == 'Token expired'


def test_verify_rejects_foreign_signature(user):
    token = jwt.encode({'userId': user.pk, 'email': user.email, 'exp': 4102444800}, 'other-secret', algorithm='HS256')

    with pytest.raises(AuthError):
        auth_service.verify(token)


def test_verify_rejects_garbage_and_missing_claims():
    with pytest.raises(AuthError):
        auth_service.verify('not.a.jwt')

    with pytest.raises(AuthError):
        auth_service.verify('')

    no_email = jwt.encode({'userId': 1, 'exp': 4102444800}, settings.JWT_SECRET, algorithm='HS256')
    with pytest.raises(AuthError):
        auth_service.verify(no_email)


def test_bcrypt_hasher_uses_cost_factor_10():
    hasher = TaskboardBCryptPasswordHasher()

    encoded = hasher.encode('pw1', hasher.salt())

    assert hasher.rounds == 10
    assert encoded.startswith('bcrypt_sha256$$2b$10$')
    assert hasher.verify('pw1', encoded)
    assert not hasher.verify('pw2', encoded)


# === HTTP ===


def test_register_endpoint(api_client):
    response = api_client.post('/api/auth/register', {'email': 'a@x.com', 'password': 'pw1'})

    assert response.status_code == 201
    assert 'token' in response.json()

    again = api_client.post('/api/auth/register', {'email': 'a@x.com', 'password': 'pw1'})
    assert again.status_code == 400
    assert again.json() == {'error': 'User already exists'}


def test_register_endpoint_missing_fields(api_client):
    response = api_client.post('/api/auth/register', {'email': 'a@x.com'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Password is required'}


def test_login_endpoint(api_client, user):
    ok = api_client.post('/api/auth/login/', {'email': 'a@x.com', 'password': 'pw1'})
    assert ok.status_code == 200
    assert auth_service.verify(ok.json()['token']).email == 'a@x.com'

    bad = api_client.post('/api/auth/login', {'email': 'a@x.com', 'password': 'nope'})
    assert bad.status_code == 401
    assert bad.json() == {'error': 'Invalid credentials'}
    assert bad['WWW-Authenticate'] == 'Bearer'


def test_malformed_json_body(api_client):
    response = api_client.generic('POST', '/api/auth/login', '{not json', content_type='application/json')

    assert response.status_code == 400
    assert 'error' in response.json()


def test_protected_route_without_token(api_client):
    response = api_client.get('/api/tasks')

    assert response.status_code == 401
    assert 'error' in response.json()
    assert response['WWW-Authenticate'] == 'Bearer'


@pytest.mark.parametrize('header', [
    'Bearer garbage',
    'Token abc',
    'Bearer',
    'Bearer a b',
])
def test_protected_route_with_bad_header(api_client, header):
    api_client.credentials(HTTP_AUTHORIZATION=header)

    response = api_client.get('/api/tasks')

    assert response.status_code == 401
    assert response['WWW-Authenticate'] == 'Bearer'


def test_protected_route_with_expired_token(api_client, user):
    with override_settings(JWT_EXPIRATION=-10):
        token = auth_service.issue_token(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    response = api_client.get('/api/logs')

    assert response.status_code == 401
    assert response.json() == {'error': 'Token expired'}
    assert response['WWW-Authenticate'] == 'Bearer'
