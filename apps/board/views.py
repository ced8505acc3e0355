# apps/board/views.py

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.views import json_object
from .broadcaster import board_broadcaster
from .services import TaskService

# Service wired to the process-wide broadcaster
task_service = TaskService(broadcaster=board_broadcaster)


class TaskListView(APIView):
    """
    GET  /api/tasks -> grouped snapshot
    POST /api/tasks -> create a task
    """

    def get(self, request):
        return Response(task_service.list_tasks())

    def post(self, request):
        task = task_service.create_task(request.user, json_object(request))
        return Response(task, status=status.HTTP_201_CREATED)


class TaskDetailView(APIView):
    """
    PUT    /api/tasks/<id> -> partial update with optional lastFetched check
    DELETE /api/tasks/<id> -> delete
    """

    def put(self, request, task_id):
        return Response(task_service.update_task(request.user, task_id, json_object(request)))

    def delete(self, request, task_id):
        return Response(task_service.delete_task(request.user, task_id))


class SmartAssignView(APIView):
    """
    POST /api/tasks/<id>/smart-assign -> assign to the least busy user
    """

    def post(self, request, task_id):
        return Response(task_service.smart_assign(request.user, task_id))
