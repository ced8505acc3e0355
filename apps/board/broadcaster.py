# apps/board/broadcaster.py

"""
Realtime broadcaster of the task board

Every successful mutation re-reads the whole task set, groups it by
status and pushes it to every connected socket, followed by the log
entry the mutation produced. There is no delta encoding and no
per-client filtering.
"""

import logging

from asgiref.sync import async_to_sync
from channels import DEFAULT_CHANNEL_LAYER
from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from django.conf import settings

from apps.activity.serializers import LogEntrySerializer
from .models import Task, TaskStatus
from .serializers import TaskSerializer

logger = logging.getLogger(__name__)

# Bucket order of the grouped snapshot
STATUS_BUCKETS = [choice.value for choice in TaskStatus]


def group_by_status(tasks):
    """
    Partitions serialized tasks into the Todo / In Progress / Done buckets

    Tasks whose status is none of those are left out and logged.
    """
    grouped = {status: [] for status in STATUS_BUCKETS}

    for task in tasks:
        bucket = grouped.get(task['status'])
        if bucket is None:
            logger.warning(f"⚠️ Invalid task status: {task['status']!r} (task {task['id']})")
            continue
        bucket.append(task)

    return grouped


def grouped_snapshot():
    """Reads every task and returns the grouped snapshot"""
    tasks = Task.objects.with_assignee().order_by('id')
    return group_by_status(TaskSerializer(tasks, many=True).data)


class ConnectionRegistry:
    """
    Sockets currently attached to the board

    Adding joins the channel-layer group, removing leaves it. The local
    set only covers connections held by this process.
    """

    def __init__(self, broadcaster):
        self._broadcaster = broadcaster
        self._channels = set()

    async def add(self, channel_name):
        await self._broadcaster.channel_layer.group_add(self._broadcaster.group, channel_name)
        self._channels.add(channel_name)
        logger.info(f"✅ Socket connected: {channel_name} ({len(self)} open)")

    async def remove(self, channel_name):
        await self._broadcaster.channel_layer.group_discard(self._broadcaster.group, channel_name)
        self._channels.discard(channel_name)
        logger.info(f"🔌 Socket disconnected: {channel_name} ({len(self)} open)")

    def __contains__(self, channel_name):
        return channel_name in self._channels

    def __len__(self):
        return len(self._channels)


class ChannelsBroadcaster:
    """
    Pushes board state through a Channels layer group

    Handed to the TaskService at construction; sockets register through
    `connections`.
    """

    def __init__(self, group=None, layer_alias=DEFAULT_CHANNEL_LAYER):
        self.group = group or settings.TASKBOARD_GROUP
        self.layer_alias = layer_alias
        self.connections = ConnectionRegistry(self)

    @property
    def channel_layer(self):
        return get_channel_layer(self.layer_alias)

    def publish(self, log_entry=None):
        """
        Broadcasts the grouped snapshot, then the new log entry

        Called synchronously after a mutation has been written. A failure
        here is logged and never undoes or fails the mutation.
        """
        try:
            snapshot = grouped_snapshot()
            entry = LogEntrySerializer(log_entry).data if log_entry is not None else None
            async_to_sync(self._send)(snapshot, entry)
        except Exception as e:
            logger.error(f"❌ Error broadcasting task update: {e}", exc_info=True)

    async def apublish_snapshot(self):
        """Re-reads the task set and sends it to every socket"""
        snapshot = await database_sync_to_async(grouped_snapshot)()
        await self._send(snapshot)

    async def _send(self, snapshot, log_entry=None):
        layer = self.channel_layer
        if layer is None:
            logger.warning("⚠️ No channel layer configured, cannot broadcast")
            return

        logger.debug(f"📡 Emitting taskUpdate to group {self.group}")
        await layer.group_send(self.group, {
            'type': 'task.update',
            'data': snapshot,
        })

        if log_entry is not None:
            await layer.group_send(self.group, {
                'type': 'log.update',
                'data': log_entry,
            })


# Process-wide broadcaster shared by the HTTP service and the socket consumer
board_broadcaster = ChannelsBroadcaster()
