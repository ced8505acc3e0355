# apps/board/routing.py

from django.urls import re_path
from . import consumers

# WebSocket routes of the board app
websocket_urlpatterns = [
    # Realtime board: grouped snapshots and activity entries
    re_path(r'^ws/tasks/?$', consumers.TaskBoardConsumer.as_asgi()),
]
