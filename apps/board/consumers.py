# apps/board/consumers.py

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.utils import timezone

from .broadcaster import board_broadcaster

logger = logging.getLogger(__name__)


class TaskBoardConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for realtime board updates

    Features:
    - Receives the grouped snapshot (taskUpdate) after every mutation
    - Receives each new activity entry (logUpdate)
    - clientTaskUpdate asks for a full re-broadcast to every client
    - Heartbeat ping/pong

    The handshake is not authenticated: every open socket sees every update.
    """

    broadcaster = board_broadcaster

    async def connect(self):
        await self.broadcaster.connections.add(self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        await self.broadcaster.connections.remove(self.channel_name)

    async def receive_json(self, content, **kwargs):
        """
        Handles client messages
        """
        message_type = content.get('type') if isinstance(content, dict) else None

        # Heartbeat
        if message_type == 'ping':
            await self.send_json({
                'type': 'pong',
                'timestamp': timezone.now().isoformat(),
            })

        # Resync request, answered to everyone
        elif message_type == 'clientTaskUpdate':
            logger.debug(f"🔄 clientTaskUpdate from {self.channel_name}")
            try:
                await self.broadcaster.apublish_snapshot()
            except Exception as e:
                logger.error(f"❌ Error handling clientTaskUpdate: {e}", exc_info=True)

        else:
            logger.warning(f"⚠️ Unknown socket message type from {self.channel_name}: {message_type!r}")

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        if not text_data:
            logger.warning(f"⚠️ Ignoring non-text frame from {self.channel_name}")
            return

        try:
            content = await self.decode_json(text_data)
        except ValueError:
            logger.error(f"❌ Invalid JSON received from {self.channel_name}")
            return

        await self.receive_json(content, **kwargs)

    # === Channel-layer event handlers ===

    async def task_update(self, event):
        await self.send_json({
            'type': 'taskUpdate',
            'data': event['data'],
        })

    async def log_update(self, event):
        await self.send_json({
            'type': 'logUpdate',
            'data': event['data'],
        })
