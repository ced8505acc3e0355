# apps/board/models.py

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


def current_timestamp():
    """Now, truncated to milliseconds like the timestamps clients send back"""
    now = timezone.now()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class TaskStatus(models.TextChoices):
    """Board columns; the values are the literals used on the wire"""

    TODO = 'Todo', 'Todo'
    IN_PROGRESS = 'In Progress', 'In Progress'
    DONE = 'Done', 'Done'


class TaskPriority(models.TextChoices):
    LOW = 'Low', 'Low'
    MEDIUM = 'Medium', 'Medium'
    HIGH = 'High', 'High'


class TaskQuerySet(models.QuerySet):

    def with_assignee(self):
        return self.select_related('assigned_user')

    def active(self):
        """Tasks that still count towards someone's workload"""
        return self.exclude(status=TaskStatus.DONE)


class Task(models.Model):
    """
    Card on the task board

    `last_modified` moves forward on every write and is what the
    optimistic concurrency check compares against.
    """

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    priority = models.CharField(
        max_length=10,
        choices=TaskPriority.choices,
    )
    status = models.CharField(
        max_length=20,
        choices=TaskStatus.choices,
        default=TaskStatus.TODO,
    )
    assigned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tasks'
    )
    last_modified = models.DateTimeField(default=current_timestamp)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        db_table = 'task'
        ordering = ['id']
        indexes = [
            models.Index(fields=['assigned_user', 'status'], name='task_assignee_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} [{self.status}]"

    def touch(self):
        """
        Bumps last_modified to now, strictly past its previous value

        Two writes inside the same millisecond still produce increasing
        timestamps.
        """
        now = current_timestamp()
        if self.last_modified and now <= self.last_modified:
            now = self.last_modified + timedelta(milliseconds=1)
        self.last_modified = now
