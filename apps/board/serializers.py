# apps/board/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Task

User = get_user_model()


class AssigneeSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email']


class TaskSerializer(serializers.ModelSerializer):
    """Wire shape of a task, with the assignee resolved to its email"""

    assignedUser = AssigneeSerializer(source='assigned_user', read_only=True)
    lastModified = serializers.DateTimeField(source='last_modified', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'priority', 'status',
            'assignedUser', 'lastModified', 'createdAt',
        ]
        read_only_fields = fields
