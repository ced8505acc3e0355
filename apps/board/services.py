# apps/board/services.py

"""
Task service - business rules of the board

Every mutation follows the same sequence: write the task, append one
activity entry in the caller's name, broadcast the new board state.
The two writes are not wrapped in a transaction; a crash between them
leaves a changed task without its log line.
"""

import logging
from datetime import datetime, timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.activity.models import LogEntry
from apps.core.exceptions import ConflictError, NotFoundError, ValidationError
from .broadcaster import grouped_snapshot
from .models import Task, TaskPriority, TaskStatus
from .serializers import TaskSerializer

logger = logging.getLogger(__name__)
User = get_user_model()

TITLE_MAX_LENGTH = Task._meta.get_field('title').max_length


class TaskService:
    """
    CRUD and smart-assign over the task store

    Args:
        broadcaster: anything with a `publish(log_entry)` method; called
            once after every successful mutation
    """

    def __init__(self, broadcaster):
        self.broadcaster = broadcaster

    def list_tasks(self):
        """All tasks grouped into the Todo / In Progress / Done buckets"""
        return grouped_snapshot()

    def create_task(self, actor, data):
        """
        Creates a task from {title, description?, priority, status?}

        Raises:
            ValidationError: bad title, priority, status or description
        """
        task = Task(
            title=self._clean_title(data.get('title')),
            description=self._clean_description(data.get('description')),
            priority=self._clean_priority(data.get('priority')),
            status=self._clean_status(data.get('status', TaskStatus.TODO)),
        )
        task.touch()
        task.save()

        logger.info(f"📝 Task created by {actor.email}: {task.title}")
        self._log_and_broadcast(actor, f"Created task: {task.title}")
        return TaskSerializer(task).data

    def update_task(self, actor, task_id, data):
        """
        Applies a partial update guarded by the optimistic concurrency check

        If `lastFetched` is present and the stored task changed after it,
        nothing is written and ConflictError carries the current task.
        Without `lastFetched` the last writer wins.

        Raises:
            NotFoundError: unknown task id
            ConflictError: stored lastModified is newer than lastFetched
            ValidationError: invalid field in the patch
        """
        task = self._get_task(task_id)

        last_fetched = self._parse_last_fetched(data.get('lastFetched'))
        if last_fetched is not None and task.last_modified > last_fetched:
            logger.info(
                f"⚔️ Conflict on task {task.pk}: stored {task.last_modified.isoformat()} "
                f"> fetched {last_fetched.isoformat()}"
            )
            raise ConflictError(current_task=TaskSerializer(task).data)

        changed = []

        if 'title' in data:
            task.title = self._clean_title(data['title'])
            changed.append('title')
        if 'description' in data:
            task.description = self._clean_description(data['description'])
            changed.append('description')
        if 'priority' in data:
            task.priority = self._clean_priority(data['priority'])
            changed.append('priority')
        if 'status' in data:
            task.status = self._clean_status(data['status'])
            changed.append('status')
        if 'assignedUser' in data:
            task.assigned_user = self._clean_assignee(data['assignedUser'])
            changed.append('assigned_user')

        task.touch()
        task.save(update_fields=changed + ['last_modified'])

        logger.info(f"✏️ Task {task.pk} updated by {actor.email}: {', '.join(changed) or 'touch'}")
        self._log_and_broadcast(actor, f"Updated task: {task.title}")
        return TaskSerializer(task).data

    def delete_task(self, actor, task_id):
        """
        Raises:
            NotFoundError: unknown task id
        """
        task = self._get_task(task_id)
        title = task.title
        task.delete()

        logger.info(f"🗑️ Task deleted by {actor.email}: {title}")
        self._log_and_broadcast(actor, f"Deleted task: {title}")
        return {'message': 'Task deleted'}

    def smart_assign(self, actor, task_id):
        """
        Assigns the task to the user with the fewest non-Done tasks

        Workloads come from one aggregate query; ties go to the lowest
        user id.

        Raises:
            NotFoundError: no users at all, or unknown task id
        """
        least_busy = self._least_busy_user()
        if least_busy is None:
            raise NotFoundError("No users available")

        task = self._get_task(task_id)
        task.assigned_user = least_busy
        task.touch()
        task.save(update_fields=['assigned_user', 'last_modified'])

        logger.info(
            f"🎯 Task {task.pk} smart-assigned to {least_busy.email} "
            f"({least_busy.active_tasks} active tasks)"
        )
        self._log_and_broadcast(actor, f"Smart assigned task: {task.title} to {least_busy.email}")
        return TaskSerializer(task).data

    # =================== PRIVATE ===================

    def _log_and_broadcast(self, actor, action):
        entry = LogEntry.record(actor.email, action)
        self.broadcaster.publish(entry)
        return entry

    def _get_task(self, task_id):
        try:
            return Task.objects.with_assignee().get(pk=int(task_id))
        except (TypeError, ValueError, Task.DoesNotExist):
            raise NotFoundError("Task not found")

    def _least_busy_user(self):
        return (
            User.objects
            .annotate(active_tasks=Count('assigned_tasks', filter=~Q(assigned_tasks__status=TaskStatus.DONE)))
            .order_by('active_tasks', 'id')
            .first()
        )

    def _clean_title(self, value):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Task title is required and must be a string")
        value = value.strip()
        if len(value) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Task title must be at most {TITLE_MAX_LENGTH} characters")
        return value

    def _clean_description(self, value):
        if value is None:
            return ''
        if not isinstance(value, str):
            raise ValidationError("Task description must be a string")
        return value

    def _clean_priority(self, value):
        if value not in TaskPriority.values:
            raise ValidationError("Invalid priority")
        return value

    def _clean_status(self, value):
        if value is None:
            return TaskStatus.TODO
        if value not in TaskStatus.values:
            raise ValidationError("Invalid status")
        return value

    def _clean_assignee(self, value):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get('id')
        try:
            return User.objects.get(pk=int(value))
        except (TypeError, ValueError, User.DoesNotExist):
            raise ValidationError("Assigned user does not exist")

    def _parse_last_fetched(self, value):
        """
        Accepts an ISO-8601 string or epoch milliseconds

        Falsy values mean the client skipped the check. A date without a
        time is midnight UTC of that day.
        """
        if value in (None, '', 0):
            return None

        if isinstance(value, bool):
            raise ValidationError("Invalid lastFetched timestamp")

        if isinstance(value, (int, float)):
            try:
                return datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
            except (OverflowError, OSError, ValueError):
                raise ValidationError("Invalid lastFetched timestamp")

        if isinstance(value, str):
            try:
                parsed = parse_datetime(value)
                if parsed is None:
                    day = parse_date(value)
                    parsed = datetime(day.year, day.month, day.day) if day else None
            except ValueError:
                parsed = None
            if parsed is not None:
                if timezone.is_naive(parsed):
                    parsed = timezone.make_aware(parsed, dt_timezone.utc)
                return parsed

        raise ValidationError("Invalid lastFetched timestamp")
