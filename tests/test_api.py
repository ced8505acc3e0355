# tests/test_api.py

import json
from datetime import timedelta

import pytest
from django.utils.dateparse import parse_datetime

from apps.activity.models import LogEntry
from apps.board import views as board_views
from apps.board.models import Task
from apps.core import views as core_views

pytestmark = pytest.mark.django_db


@pytest.fixture()
def task(auth_client):
    response = auth_client.post('/api/tasks', {'title': 'Ship it', 'priority': 'High'})
    assert response.status_code == 201
    return response.json()


# === Tasks ===


def test_list_tasks_grouped(auth_client, task):
    response = auth_client.get('/api/tasks/')

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {'Todo', 'In Progress', 'Done'}
    assert body['Todo'][0]['id'] == task['id']
    assert body['Todo'][0]['title'] == 'Ship it'


def test_create_task_shape(task):
    assert set(task) == {
        'id', 'title', 'description', 'priority', 'status',
        'assignedUser', 'lastModified', 'createdAt',
    }
    assert task['status'] == 'Todo'


def test_create_task_invalid(auth_client):
    response = auth_client.post('/api/tasks', {'title': 'x', 'priority': 'Urgent'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid priority'}


def test_update_task(auth_client, task):
    response = auth_client.put(f"/api/tasks/{task['id']}", {
        'status': 'Done',
        'lastFetched': task['lastModified'],
    })

    assert response.status_code == 200
    assert response.json()['status'] == 'Done'
    assert parse_datetime(response.json()['lastModified']) > parse_datetime(task['lastModified'])


def test_update_conflict_returns_current_task(auth_client, task):
    Task.objects.filter(pk=task['id']).update(title='Changed elsewhere')
    stored = Task.objects.get(pk=task['id'])
    stale = (stored.last_modified - timedelta(seconds=1)).isoformat()

    response = auth_client.put(f"/api/tasks/{task['id']}", {'title': 'Mine', 'lastFetched': stale})

    assert response.status_code == 409
    body = response.json()
    assert body['error'] == 'Conflict detected'
    assert body['currentTask']['id'] == task['id']
    assert body['currentTask']['title'] == 'Changed elsewhere'


@pytest.mark.parametrize('task_id', ['999', 'abc'])
def test_unknown_task_is_404(auth_client, task_id):
    put = auth_client.put(f'/api/tasks/{task_id}', {'title': 'x'})
    delete = auth_client.delete(f'/api/tasks/{task_id}')
    assign = auth_client.post(f'/api/tasks/{task_id}/smart-assign')

    for response in (put, delete, assign):
        assert response.status_code == 404
        assert response.json() == {'error': 'Task not found'}


def test_delete_task(auth_client, task):
    response = auth_client.delete(f"/api/tasks/{task['id']}/")

    assert response.status_code == 200
    assert response.json() == {'message': 'Task deleted'}
    assert not Task.objects.filter(pk=task['id']).exists()


def test_smart_assign(auth_client, task, user):
    response = auth_client.post(f"/api/tasks/{task['id']}/smart-assign")

    assert response.status_code == 200
    assert response.json()['assignedUser'] == {'id': user.pk, 'email': 'a@x.com'}


def test_mutations_are_logged_as_caller(auth_client, task):
    auth_client.delete(f"/api/tasks/{task['id']}")

    actions = list(LogEntry.objects.order_by('id').values_list('user', 'action'))
    assert actions == [
        ('a@x.com', 'Created task: Ship it'),
        ('a@x.com', 'Deleted task: Ship it'),
    ]


def test_unexpected_error_is_500(auth_client, monkeypatch):
    def explode():
        raise RuntimeError('database is gone')

    monkeypatch.setattr(board_views.task_service, 'list_tasks', explode)

    response = auth_client.get('/api/tasks')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}


def test_method_not_allowed(auth_client):
    response = auth_client.patch('/api/tasks', {})

    assert response.status_code == 405
    assert 'error' in response.json()


# === Health ===


def test_health_ok(api_client):
    response = api_client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'OK'}


def test_health_reports_broken_cache(api_client, monkeypatch):
    class BrokenCache:
        def set(self, *args, **kwargs):
            raise ConnectionError('cache down')

        def get(self, *args, **kwargs):
            return None

    monkeypatch.setattr(core_views, 'cache', BrokenCache())

    response = api_client.get('/health/')

    assert response.status_code == 500
    body = response.json()
    assert body['status'] == 'unhealthy'
    assert body['error'] == 'cache down'


# === Request bodies ===


@pytest.mark.parametrize('body', [[], [1], None, 'x', 42])
@pytest.mark.parametrize('method, path', [
    ('post', '/api/auth/register'),
    ('post', '/api/auth/login'),
    ('post', '/api/tasks'),
    ('put', '/api/tasks/{id}'),
])
def test_body_must_be_json_object(auth_client, task, method, path, body):
    response = auth_client.generic(
        method.upper(),
        path.format(id=task['id']),
        json.dumps(body),
        content_type='application/json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Request body must be a JSON object'}
